import asyncio

from unittest import IsolatedAsyncioTestCase

from pupa.task_queue import TaskQueue


class TaskQueueCase(IsolatedAsyncioTestCase):

    async def test_tasks_run_one_at_a_time_in_order(self):
        queue = TaskQueue()
        log = []

        def make_task(name):
            async def task():
                log.append(('start', name))
                await asyncio.sleep(0.01)
                log.append(('end', name))
                return name
            return task

        # When I post several tasks at once...
        results = await asyncio.gather(*[queue.post_task(make_task(name)) for name in ('a', 'b', 'c')])

        # ... they never overlap and run in the order they were posted
        self.assertEqual(results, ['a', 'b', 'c'])
        self.assertEqual(log, [('start', 'a'), ('end', 'a'),
                               ('start', 'b'), ('end', 'b'),
                               ('start', 'c'), ('end', 'c')])

    async def test_failing_task_does_not_block_the_queue(self):
        queue = TaskQueue()

        async def fail():
            raise ValueError('screenshot failed')

        async def succeed():
            return 'ok'

        failed, succeeded = await asyncio.gather(queue.post_task(fail), queue.post_task(succeed),
                                                 return_exceptions=True)
        self.assertIsInstance(failed, ValueError)
        self.assertEqual(succeeded, 'ok')
