import logging


logger = logging.getLogger(__name__)


class EventEmitter:
    '''Keeps named listeners and calls them synchronously, in registration order, on emit'''

    def __init__(self):
        self._event_handlers = {}

    def on(self, event, handler):
        self._event_handlers[event] = self._event_handlers.get(event, [])
        self._event_handlers[event].append(handler)
        return self

    def remove_listener(self, event, handler):
        handlers = self._event_handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)
        if not handlers:
            self._event_handlers.pop(event, None)
        return self

    def listener_count(self, event):
        return len(self._event_handlers.get(event, []))

    def emit(self, event, *args):
        handlers = list(self._event_handlers.get(event, []))
        if not handlers:
            return False
        logger.debug('EMIT - %s to %s listener(s)', event, len(handlers))
        for cb in handlers:
            cb(*args)
        return True
