class LyricsError(RuntimeError):
    pass


class CacheError(LyricsError):
    pass


class InvalidQuery(LyricsError):
    pass


class SourceConfigError(LyricsError):
    pass
