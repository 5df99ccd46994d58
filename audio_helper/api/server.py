# audio_helper/api/server.py
from typing import Optional
import logging

from fastapi import FastAPI, UploadFile, File, Form, APIRouter, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from ..audio.formats import AudioFormat, AudioQuality, RawAudioConfig
from ..audio.mp3 import encode_mp3, encoder_available
from ..audio.pcm_io import is_pcm_file
from ..audio.wav import encode_wav
from ..config import VERSION, DEFAULT_MP3_BITRATE, DEFAULT_MP3_QUALITY
from ..errors import AudioHelperError, NotAPcmFile, EncoderBuildFailure, InvalidAudioConfig
from ..pipeline.infer import infer_audio_config

logger = logging.getLogger(__name__)

# -------------------------
# App + CORS
# -------------------------
app = FastAPI(title="Audio Helper API", version=VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # tighten in prod
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api = APIRouter(prefix="/api")

MEDIA_TYPES = {
    AudioFormat.WAV: "audio/wav",
    AudioFormat.MP3: "audio/mpeg",
}


# -------------------------
# Models
# -------------------------
class InferRequest(BaseModel):
    filename: str


class AudioConfigResponse(BaseModel):
    sample_rate: int
    channels: int
    bits_per_sample: int


def _config_response(config: RawAudioConfig) -> AudioConfigResponse:
    return AudioConfigResponse(
        sample_rate=config.sample_rate,
        channels=config.channels,
        bits_per_sample=config.bits_per_sample,
    )


def _status_code(error: AudioHelperError) -> int:
    # Caller mistakes are 400, encoder and I/O trouble is 500
    if isinstance(error, (NotAPcmFile, EncoderBuildFailure, InvalidAudioConfig)):
        return 400
    return 500


# -------------------------
# Utility endpoints
# -------------------------
@api.get("/health")
def health():
    return {"ok": True, "version": VERSION, "mp3_encoder": encoder_available()}


@api.post("/infer", response_model=AudioConfigResponse)
def infer(req: InferRequest):
    return _config_response(infer_audio_config(req.filename))


# -------------------------
# Conversion
# -------------------------
@api.post("/convert")
def convert(
    file: UploadFile = File(...),
    format: AudioFormat = Form(AudioFormat.WAV),
    sample_rate: Optional[int] = Form(None),
    channels: Optional[int] = Form(None),
    bits_per_sample: Optional[int] = Form(None),
    bitrate: int = Form(DEFAULT_MP3_BITRATE),
    quality: AudioQuality = Form(AudioQuality(DEFAULT_MP3_QUALITY)),
):
    """
    Upload a raw .pcm file and get WAV or MP3 bytes back.
    Declared sync so FastAPI runs it in the threadpool while ffmpeg encodes.
    Missing sampling parameters are inferred from the uploaded filename;
    the configuration actually used is echoed in X-Audio-* headers.
    """
    filename = file.filename or ""
    try:
        if not is_pcm_file(filename):
            raise NotAPcmFile(filename)

        inferred = infer_audio_config(filename)
        config = RawAudioConfig(
            sample_rate=sample_rate if sample_rate is not None else inferred.sample_rate,
            channels=channels if channels is not None else inferred.channels,
            bits_per_sample=bits_per_sample if bits_per_sample is not None else inferred.bits_per_sample,
        )

        payload = file.file.read()
        if format is AudioFormat.WAV:
            data = encode_wav(payload, config)
        else:
            data = encode_mp3(payload, config.to_mp3_config(bitrate, quality))
    except AudioHelperError as e:
        logger.warning("Conversion of %s failed: %s", filename, e)
        raise HTTPException(status_code=_status_code(e), detail={"kind": e.kind, "error": str(e)})

    return Response(
        content=data,
        media_type=MEDIA_TYPES[format],
        headers={
            "X-Audio-Sample-Rate": str(config.sample_rate),
            "X-Audio-Channels": str(config.channels),
            "X-Audio-Bits-Per-Sample": str(config.bits_per_sample),
        },
    )


app.include_router(api)


# -------------------------
# Main
# -------------------------

if __name__ == "__main__":
    import sys

    import uvicorn

    logging.basicConfig(level=logging.INFO)
    logging.info("Starting Audio Helper API...")
    if not encoder_available():
        logging.warning("ffmpeg not found - MP3 conversion will fail")

    port = 8000
    if len(sys.argv) > 2 and sys.argv[1] == "--port":
        try:
            port = int(sys.argv[2])
        except ValueError:
            port = 8000

    uvicorn.run(app, host="0.0.0.0", port=port)
