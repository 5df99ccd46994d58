"""Failure kinds raised by the conversion functions.

Every error carries a ``kind`` string so that lossy boundaries (exit codes,
HTTP statuses, the ``-1`` status of the marshalling layer) can still report
what went wrong.
"""


class AudioHelperError(RuntimeError):
    kind = "error"


class NotAPcmFile(AudioHelperError):
    kind = "not_a_pcm_file"

    def __init__(self, path):
        super().__init__(f"Input file is not a PCM file: {path}")
        self.path = path


class InputNotFound(AudioHelperError):
    kind = "input_not_found"

    def __init__(self, path):
        super().__init__(f"Input file does not exist: {path}")
        self.path = path


class IoFailure(AudioHelperError):
    kind = "io_failure"

    def __init__(self, stage: str, path, reason: str = ""):
        message = f"I/O failure while trying to {stage} {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.stage = stage
        self.path = path


class EncoderBuildFailure(AudioHelperError):
    kind = "encoder_build_failure"


class EncodeFailure(AudioHelperError):
    kind = "encode_failure"


class FlushFailure(AudioHelperError):
    kind = "flush_failure"


class InvalidAudioConfig(AudioHelperError):
    kind = "invalid_audio_config"
