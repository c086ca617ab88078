import asyncio


class TaskQueue:
    '''Runs posted coroutine functions one at a time, in the order they were posted.

    A single queue is shared by every page of a browser so that operations which
    need the window in the foreground (screenshots) never overlap.
    '''

    def __init__(self):
        self._lock = asyncio.Lock()

    async def post_task(self, task):
        """Run `task` once every previously posted task has finished.

        Args:
            task (callable): A function taking no arguments that returns an awaitable.

        Returns:
            Whatever the awaited task returns. If it raises, the error goes to this caller
            only; tasks posted afterwards still run.
        """
        async with self._lock:
            return await task()
