import asyncio
import logging

from . import settings
from .events import EventEmitter
from .exceptions import BrowserError, BrowserTimeoutError
from .target import Target
from .task_queue import TaskQueue


logger = logging.getLogger(__name__)

_SETTINGS_VIEWPORT = object()


PAGE_TARGET_TYPES = ('page', 'background_page', 'webview')


def is_page_target(target_info):
    return target_info.get('type') in PAGE_TARGET_TYPES


class BrowserEvents:
    TARGET_CREATED = 'targetcreated'
    TARGET_CHANGED = 'targetchanged'
    TARGET_DESTROYED = 'targetdestroyed'


class Browser(EventEmitter):
    '''Owns the registry of targets reported by the browser and drives their lifecycle.

    `connection` is anything with a `new_session(target_id)` coroutine that attaches a new
    session to a target. The `_target_*` methods are meant to be hooked to the protocol's
    `Target.targetCreated`, `Target.targetInfoChanged` and `Target.targetDestroyed` events.
    '''

    def __init__(self,
                 connection,
                 context_ids=(),
                 ignore_https_errors=None,
                 default_viewport=_SETTINGS_VIEWPORT,
                 is_page_target_callback=None):
        super().__init__()
        self.connection = connection
        if ignore_https_errors is None:
            ignore_https_errors = settings.IGNORE_HTTPS_ERRORS
        self._ignore_https_errors = ignore_https_errors
        # None turns viewport emulation off
        if default_viewport is _SETTINGS_VIEWPORT:
            default_viewport = dict(settings.DEFAULT_VIEWPORT)
        self._default_viewport = default_viewport
        self._is_page_target = is_page_target_callback or is_page_target
        self._screenshot_task_queue = TaskQueue()

        self._default_context = BrowserContext(self)
        self._contexts = {context_id: BrowserContext(self, context_id) for context_id in context_ids}
        self._targets = {}
        self._announcements = {}
        self._pending_events = set()

    # Public API #

    def get_target(self, target_id):
        return self._targets.get(target_id)

    def targets(self):
        """All the initialized targets, across every browser context."""
        return [target for target in self._targets.values() if target.is_initialized]

    def browser_contexts(self):
        return [self._default_context] + list(self._contexts.values())

    def default_browser_context(self):
        return self._default_context

    async def pages(self):
        """Page handles of every page target, across every browser context."""
        contexts_pages = await asyncio.gather(*[context.pages() for context in self.browser_contexts()])
        return [page for pages in contexts_pages for page in pages]

    async def wait_for_target(self, predicate, timeout=None):
        """Wait for an initialized target matching `predicate`.

        Args:
            predicate (callable): Takes a Target and returns whether it is the one to wait for.
            timeout (int, optional): Maximum number of seconds to wait. Defaults to settings.TARGET_TIMEOUT.

        Returns:
            The first matching Target, existing or future.

        Raises:
            BrowserTimeoutError: If no matching target shows up in time.
        """
        timeout = settings.TARGET_TIMEOUT if timeout is None else timeout
        for target in self.targets():
            if predicate(target):
                return target

        found = asyncio.get_running_loop().create_future()

        def _check(target):
            if not found.done() and not target.is_closed and predicate(target):
                found.set_result(target)

        self.on(BrowserEvents.TARGET_CREATED, _check)
        self.on(BrowserEvents.TARGET_CHANGED, _check)
        try:
            return await asyncio.wait_for(found, timeout)
        except asyncio.TimeoutError:
            raise BrowserTimeoutError('Timed out after {} seconds waiting for target'.format(timeout))
        finally:
            self.remove_listener(BrowserEvents.TARGET_CREATED, _check)
            self.remove_listener(BrowserEvents.TARGET_CHANGED, _check)

    # Protocol event handlers #

    def _target_created(self, target_info):
        target_id = target_info['targetId']
        if target_id in self._targets:
            raise BrowserError('Target {} already exists'.format(target_id))

        context_id = target_info.get('browserContextId')
        context = self._contexts.get(context_id, self._default_context)
        target = Target(target_info,
                        context,
                        lambda: self.connection.new_session(target_id),
                        self._ignore_https_errors,
                        self._default_viewport,
                        self._screenshot_task_queue,
                        self._is_page_target)
        self._targets[target_id] = target
        logger.debug('Target %s created: type=%s url=%s', target_id, target.type(), target.url())

        self._announcements[target_id] = self._schedule(self._announce_target(target))
        return target

    def _target_info_changed(self, target_info):
        target = self._get_known_target(target_info.get('targetId'))
        previous_url = target.url()
        was_initialized = target.is_initialized
        target.update_info(target_info)
        if was_initialized and previous_url != target.url():
            self._emit_target_event(BrowserEvents.TARGET_CHANGED, target)

    def _target_destroyed(self, target_id):
        target = self._get_known_target(target_id)
        del self._targets[target_id]
        announcement = self._announcements.pop(target_id)
        if not target.is_initialized:
            target.report_readiness(False)
        target.report_closed()
        logger.debug('Target %s destroyed', target_id)
        self._schedule(self._announce_destroyed(target, announcement))

    # Private methods

    def _get_known_target(self, target_id):
        target = self._targets.get(target_id)
        if target is None:
            raise BrowserError('Unknown target {}'.format(target_id))
        return target

    def _schedule(self, coro):
        task = asyncio.ensure_future(coro)
        self._pending_events.add(task)
        task.add_done_callback(self._pending_events.discard)
        return task

    async def _announce_target(self, target):
        announced = await target.wait_for_initialization()
        if announced:
            self._emit_target_event(BrowserEvents.TARGET_CREATED, target)
        return announced

    async def _announce_destroyed(self, target, announcement):
        # Only targets that were announced as created are announced as destroyed, and always after
        if await asyncio.shield(announcement):
            self._emit_target_event(BrowserEvents.TARGET_DESTROYED, target)

    def _emit_target_event(self, event, target):
        self.emit(event, target)
        target.browser_context().emit(event, target)


class BrowserContext(EventEmitter):
    def __init__(self, browser, context_id=None):
        super().__init__()
        self._browser = browser
        self._id = context_id

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, self._id or 'default')

    @property
    def id(self):
        return self._id

    def browser(self):
        return self._browser

    def is_incognito(self):
        return self._id is not None

    def targets(self):
        return [target for target in self._browser.targets() if target.browser_context() is self]

    async def pages(self):
        page_targets = [target for target in self.targets() if target.type() == 'page']
        pages = await asyncio.gather(*[target.page() for target in page_targets])
        return [page for page in pages if page is not None]

    async def wait_for_target(self, predicate, timeout=None):
        return await self._browser.wait_for_target(
            lambda target: target.browser_context() is self and predicate(target), timeout=timeout)
