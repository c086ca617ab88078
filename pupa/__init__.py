import logging

from . import settings
from .browser import Browser, BrowserContext
from .page import Page
from .target import Target
from .worker import WebWorker


_logger = logging.getLogger('pupa')
_handler = logging.StreamHandler()
_formatter = logging.Formatter('%(asctime) - 5s - [%(levelname)s:%(name)s] - %(message)s', '%m-%d-%Y %H:%M:%S')
_handler.setFormatter(_formatter)
_handler.setLevel(logging.DEBUG)
_logger.addHandler(_handler)
_logger.setLevel(settings.LOGLEVEL)
_logger.propagate = False


__all__ = ['Browser', 'BrowserContext', 'Page', 'Target', 'WebWorker']
