class BrowserError(Exception):
    pass


class TargetError(BrowserError):
    pass


class PageError(BrowserError):
    pass


class BrowserTimeoutError(BrowserError, TimeoutError):
    pass
