from unittest import IsolatedAsyncioTestCase

from pupa.page import Page, PageEvents
from pupa.task_queue import TaskQueue
from pupa.worker import WebWorker

from ..test_helpers import FakeSession, make_target, target_info


class PageCase(IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.session = FakeSession('p1')
        self.target = make_target(target_info('p1', url='https://example.com'))

    async def test_create(self):
        queue = TaskQueue()
        page = await Page.create(self.session, self.target, True, {'width': 1280, 'height': 720}, queue)

        self.assertEqual(self.session.methods(), ['Page.enable',
                                                  'Security.setIgnoreCertificateErrors',
                                                  'Emulation.setDeviceMetricsOverride',
                                                  'Emulation.setTouchEmulationEnabled'])
        self.assertEqual(self.session.sent[1][1], {'ignore': True})
        self.assertIs(page.target(), self.target)
        self.assertIs(page.browser(), self.target.browser())
        self.assertIs(page.browser_context(), self.target.browser_context())
        self.assertIs(page.screenshot_task_queue, queue)
        self.assertEqual(page.listener_count(PageEvents.POPUP), 0)

    async def test_set_viewport(self):
        page = await Page.create(self.session, self.target, False, None, TaskQueue())

        # When I switch the page to mobile emulation...
        reload_needed = await page.set_viewport({'width': 375, 'height': 667, 'mobile': True, 'is_landscape': True})
        # ... the page needs a reload and the metrics are sent to the browser
        self.assertTrue(reload_needed)
        params = self.session.sent[-2][1]
        self.assertEqual(params['width'], 375)
        self.assertEqual(params['deviceScaleFactor'], 1)
        self.assertTrue(params['mobile'])
        self.assertEqual(params['screenOrientation'], {'angle': 90, 'type': 'landscapePrimary'})

        # And setting the same emulation again needs no reload
        self.assertFalse(await page.set_viewport({'width': 414, 'height': 896, 'mobile': True}))
        self.assertEqual(page.viewport, {'width': 414, 'height': 896, 'mobile': True})


class WebWorkerCase(IsolatedAsyncioTestCase):

    async def test_hooks_get_runtime_events(self):
        session = FakeSession('w1')
        messages = []
        exceptions = []
        worker = WebWorker(session,
                           'https://example.com/sw.js',
                           lambda **event: messages.append(event),
                           lambda **event: exceptions.append(event))

        session.fire('Runtime.consoleAPICalled', type='log', args=[{'value': 'hi'}])
        session.fire('Runtime.exceptionThrown', exceptionDetails={'text': 'Uncaught'})

        self.assertEqual(worker.url(), 'https://example.com/sw.js')
        self.assertIs(worker.session, session)
        self.assertEqual(messages, [{'type': 'log', 'args': [{'value': 'hi'}]}])
        self.assertEqual(exceptions, [{'exceptionDetails': {'text': 'Uncaught'}}])
