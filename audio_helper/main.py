import logging
from pathlib import Path
from typing import Optional

import typer

from .audio.formats import AudioFormat, AudioQuality, Mp3Bitrate, RawAudioConfig
from .audio.pcm_io import ensure_parent_dir
from .config import VERSION, OUTPUT_DIR, DEFAULT_MP3_BITRATE, DEFAULT_MP3_QUALITY
from .errors import AudioHelperError
from .pipeline.convert import convert_pcm
from .pipeline.infer import infer_audio_config

app = typer.Typer(
    name="audio-helper",
    help="Convert raw PCM to WAV or MP3",
    add_completion=False,
)


def _describe(config: RawAudioConfig) -> str:
    return f"{config.sample_rate} Hz, {config.channels} ch, {config.bits_per_sample} bit"


@app.command()
def convert(
    input_path: Path = typer.Argument(..., help="Raw .pcm file"),
    output_path: Optional[Path] = typer.Argument(
        None, help="Destination .wav or .mp3 file (defaults to assets/output/<input>.<format>)"
    ),
    fmt: Optional[AudioFormat] = typer.Option(
        None, "--format", "-f", help="Output format (defaults to the output file extension)"
    ),
    sample_rate: Optional[int] = typer.Option(None, "--sample-rate", "-r"),
    channels: Optional[int] = typer.Option(None, "--channels", "-c"),
    bits: Optional[int] = typer.Option(None, "--bits", "-b"),
    bitrate: int = typer.Option(DEFAULT_MP3_BITRATE, "--bitrate", help="MP3 bitrate in kbps"),
    quality: AudioQuality = typer.Option(AudioQuality(DEFAULT_MP3_QUALITY), "--quality"),
):
    """
    Convert INPUT_PATH to WAV or MP3. Sampling parameters not given on the
    command line are inferred from the input filename.
    """
    if fmt is None:
        suffix = output_path.suffix.lower().lstrip(".") if output_path else ""
        fmt = AudioFormat.MP3 if suffix == AudioFormat.MP3.value else AudioFormat.WAV
    if output_path is None:
        output_path = Path.cwd() / OUTPUT_DIR / f"{input_path.stem}.{fmt.value}"

    explicit = None
    if sample_rate is not None or channels is not None or bits is not None:
        inferred = infer_audio_config(input_path.name)
        explicit = RawAudioConfig(
            sample_rate=sample_rate if sample_rate is not None else inferred.sample_rate,
            channels=channels if channels is not None else inferred.channels,
            bits_per_sample=bits if bits is not None else inferred.bits_per_sample,
        )

    try:
        ensure_parent_dir(output_path)
        used = convert_pcm(input_path, output_path, fmt, explicit, bitrate, quality)
    except AudioHelperError as e:
        typer.echo(f"[{e.kind}] {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"{input_path} -> {output_path} ({fmt.value}, {_describe(used)})")


@app.command()
def infer(filename: str = typer.Argument(..., help="Filename to inspect")):
    """Show the configuration that would be inferred from FILENAME."""
    typer.echo(_describe(infer_audio_config(Path(filename).name)))


@app.command()
def bitrates():
    """List the supported MP3 bitrates."""
    typer.echo(", ".join(f"{b.value}" for b in Mp3Bitrate))


@app.command()
def version():
    typer.echo(f"audio-helper {VERSION}")


def main():
    logging.basicConfig(level=logging.INFO, format="[%(name)s] %(message)s")
    app()


if __name__ == "__main__":
    main()
