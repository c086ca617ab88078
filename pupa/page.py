import logging

from .events import EventEmitter


logger = logging.getLogger(__name__)


class PageEvents:
    POPUP = 'popup'


class Page(EventEmitter):
    # Only the handle side of a page: what a target needs to bind one to a session

    def __init__(self, client, target, ignore_https_errors, screenshot_task_queue):
        super().__init__()
        self._client = client
        self._target = target
        self._ignore_https_errors = ignore_https_errors
        self._screenshot_task_queue = screenshot_task_queue

        self._viewport = None
        self._emulating_mobile = False
        self._emulating_touch = False

    @classmethod
    async def create(cls, client, target, ignore_https_errors, default_viewport, screenshot_task_queue):
        """Build a page bound to `client` and prepare it for use.

        Args:
            client: The session dedicated to this page.
            target (Target): The target the page belongs to.
            ignore_https_errors (bool): Whether certificate errors should be ignored.
            default_viewport (dict or None): Viewport to emulate right away, see `set_viewport`.
            screenshot_task_queue (TaskQueue): Queue shared by every page of the browser.

        Returns:
            A Page.
        """
        page = cls(client, target, ignore_https_errors, screenshot_task_queue)
        await page._initialize()
        if default_viewport:
            await page.set_viewport(default_viewport)
        return page

    async def _initialize(self):
        await self._client.send('Page.enable')
        if self._ignore_https_errors:
            await self._client.send('Security.setIgnoreCertificateErrors', ignore=True)

    @property
    def session(self):
        return self._client

    @property
    def viewport(self):
        return self._viewport

    @property
    def screenshot_task_queue(self):
        return self._screenshot_task_queue

    def target(self):
        return self._target

    def browser(self):
        return self._target.browser()

    def browser_context(self):
        return self._target.browser_context()

    async def set_viewport(self, viewport):
        """Set a viewport for the page to emulate.

        Args:
            viewport (dict):
                - height (int)
                - width (int)
                - device_scale_factor (int, optional: defaults to 1)
                - mobile (bool, optional: defaults to False)
                - has_touch (bool, optional: defaults to False)
                - is_landscape (bool, optional: defaults to False)

        Returns:
            True if the page has to reload for mobile or touch emulation to take effect.
        """
        mobile = viewport.get('mobile', False)
        has_touch = viewport.get('has_touch', False)
        if viewport.get('is_landscape'):
            screen_orientation = {'angle': 90, 'type': 'landscapePrimary'}
        else:
            screen_orientation = {'angle': 0, 'type': 'portraitPrimary'}

        await self._client.send('Emulation.setDeviceMetricsOverride',
                                width=viewport.get('width'),
                                height=viewport.get('height'),
                                deviceScaleFactor=viewport.get('device_scale_factor', 1),
                                mobile=mobile,
                                screenOrientation=screen_orientation)
        await self._client.send('Emulation.setTouchEmulationEnabled', enabled=has_touch)
        reload_needed = self._emulating_mobile != mobile or self._emulating_touch != has_touch
        self._emulating_mobile = mobile
        self._emulating_touch = has_touch
        self._viewport = viewport
        logger.debug('Viewport for target %s set to %sx%s',
                     self._target.target_id, viewport.get('width'), viewport.get('height'))
        return reload_needed
