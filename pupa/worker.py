class WebWorker:
    def __init__(self, client, url, console_api_called, exception_thrown):
        self._client = client
        self._url = url
        self._client.on('Runtime.consoleAPICalled', console_api_called)
        self._client.on('Runtime.exceptionThrown', exception_thrown)

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, self._url)

    @property
    def session(self):
        return self._client

    def url(self):
        return self._url
