class ScoreTrackError(Exception):
    pass


class InvalidConfigurationError(ScoreTrackError, ValueError):
    pass


class InvalidPlayerError(ScoreTrackError, ValueError):
    pass


class AlreadyCompletedError(ScoreTrackError):
    pass


class InvalidStateError(ScoreTrackError):
    pass


class StructuralInvariantError(ScoreTrackError):
    """
    Raised when a child game or set is appended while the trailing one is
    still being played. Only a broken controller gets here.
    """
    pass
