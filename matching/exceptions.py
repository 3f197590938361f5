class MatchingError(Exception):
    pass


class MatchingDataError(MatchingError):
    """The data layer could not be reached or failed mid-query."""


class ActivityNotFound(MatchingError):
    pass


class RunNotFound(MatchingError):
    pass
