# errors.py


class ScreenError(Exception):
    """Base class for every fatal condition of a streaming run."""


class ConfigError(ScreenError):
    pass


class DeviceNotFoundError(ScreenError):
    pass


class NoAssetsError(ScreenError):
    pass


class DecodeError(ScreenError):
    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot decode {self.path}: {reason}")


class TransmitError(ScreenError):
    def __init__(self, frame_index: int, reason: str):
        self.frame_index = frame_index
        self.reason = reason
        super().__init__(f"Failed to send frame {frame_index}: {reason}")
