import asyncio
import logging

from .exceptions import TargetError
from .page import Page, PageEvents
from .worker import WebWorker


logger = logging.getLogger(__name__)


class Target:
    TARGET_TYPES = (
        'page',
        'background_page',
        'service_worker',
        'shared_worker',
        'browser',
        'webview',
    )
    WORKER_TYPES = ('service_worker', 'shared_worker')

    def __init__(self,
                 target_info,
                 browser_context,
                 session_factory,
                 ignore_https_errors,
                 default_viewport,
                 screenshot_task_queue,
                 is_page_target):
        self._target_info = dict(target_info)
        self._target_id = self._target_info['targetId']
        self._browser_context = browser_context
        self._session_factory = session_factory
        self._ignore_https_errors = ignore_https_errors
        self._default_viewport = default_viewport
        self._screenshot_task_queue = screenshot_task_queue
        self._is_page_target = is_page_target

        self._page_future = None
        self._worker_future = None

        loop = asyncio.get_running_loop()
        self._initialized_signal = loop.create_future()
        self._initialized_future = loop.create_task(self._initialize())
        self._closed_future = loop.create_future()

        if self._is_known():
            self._initialized_callback(True)

    def __repr__(self):
        return '<{} {} {}>'.format(self.__class__.__name__, self.type(), self._target_id)

    @property
    def target_id(self):
        return self._target_id

    @property
    def info(self):
        return self._target_info

    @property
    def is_initialized(self):
        return self._initialized_signal.done() and self._initialized_signal.result()

    @property
    def is_closed(self):
        return self._closed_future.done()

    # Public API #

    def create_session(self):
        """Open a new devtools session attached to this target.

        Every call opens a separate session; it is not shared with the page or worker handles.

        Returns:
            An awaitable resolving to the session.
        """
        return self._session_factory()

    async def page(self):
        """Get the page handle for this target, creating it on first use.

        Returns:
            A Page, or None if the target is not page-like.
        """
        if self._page_future is None and self._is_page_target(self._target_info):
            self._page_future = asyncio.ensure_future(self._create_page())
        if self._page_future is None:
            return None
        return await asyncio.shield(self._page_future)

    async def worker(self):
        """Get the worker handle for this target, creating it on first use.

        Returns:
            A WebWorker, or None if the target is not a service or shared worker.
        """
        if self._target_info.get('type') not in self.WORKER_TYPES:
            return None
        if self._worker_future is None:
            self._worker_future = asyncio.ensure_future(self._create_worker())
        return await asyncio.shield(self._worker_future)

    def url(self):
        return self._target_info.get('url')

    def type(self):
        """Identify what kind of target this is.

        Returns:
            One of "page", "background_page", "service_worker", "shared_worker", "browser",
            "webview" or "other". Any type the browser reports outside that list is "other".
        """
        target_type = self._target_info.get('type')
        if target_type in self.TARGET_TYPES:
            return target_type
        return 'other'

    def browser(self):
        return self._browser_context.browser()

    def browser_context(self):
        return self._browser_context

    def opener(self):
        """Get the target that opened this one. Top-level targets return None."""
        opener_id = self._target_info.get('openerId')
        if not opener_id:
            return None
        return self.browser().get_target(opener_id)

    async def wait_for_initialization(self):
        """Wait until the target is known well enough to be handed out.

        Returns:
            True once the target is usable, False if it went away before that.
        """
        return await asyncio.shield(self._initialized_future)

    async def wait_for_close(self):
        await asyncio.shield(self._closed_future)

    # Owner API, called by the browser as protocol events arrive #

    def report_readiness(self, success):
        self._initialized_callback(success)

    def report_closed(self):
        if self._closed_future.done():
            return
        logger.debug('Target %s closed', self._target_id)
        self._closed_future.set_result(None)

    def update_info(self, target_info):
        if target_info.get('targetId') != self._target_id:
            raise TargetError('Cannot replace info of target {} with info of target {}'.format(
                self._target_id, target_info.get('targetId')))
        self._target_info = dict(target_info)
        logger.debug('Target %s changed: type=%s url=%s', self._target_id, self.type(), self.url())

        if not self._initialized_signal.done() and self._is_known():
            self._initialized_callback(True)

    # Private methods

    def _is_known(self):
        # Fresh page targets report an empty url until their first navigation is known
        return not self._is_page_target(self._target_info) or self._target_info.get('url') != ''

    def _initialized_callback(self, success):
        if self._initialized_signal.done():
            logger.debug('Ignoring readiness report for target %s, already reported', self._target_id)
            return
        logger.debug('Target %s ready: %s', self._target_id, success)
        self._initialized_signal.set_result(success)

    async def _initialize(self):
        success = await self._initialized_signal
        if not success:
            return False
        opener = self.opener()
        if opener is None or opener._page_future is None or self.type() != 'page':
            return True
        try:
            await self._relay_popup(opener)
        except Exception:
            logger.warning('Could not report popup %s to opener %s', self._target_id, opener.target_id,
                           exc_info=True)
        return True

    async def _relay_popup(self, opener):
        opener_page = await asyncio.shield(opener._page_future)
        if opener_page is None or not opener_page.listener_count(PageEvents.POPUP):
            return
        popup_page = await self.page()
        logger.debug('Target %s is a popup of %s', self._target_id, opener.target_id)
        opener_page.emit(PageEvents.POPUP, popup_page)

    async def _create_page(self):
        logger.debug('Creating page for target %s', self._target_id)
        client = await self._session_factory()
        return await Page.create(client,
                                 self,
                                 self._ignore_https_errors,
                                 self._default_viewport,
                                 self._screenshot_task_queue)

    async def _create_worker(self):
        logger.debug('Creating worker for target %s', self._target_id)
        client = await self._session_factory()
        # TODO: relay worker console messages and exceptions to the page's listeners
        return WebWorker(client, self._target_info.get('url'), lambda **event: None, lambda **event: None)
