"""
Shared fixtures for Detectify client tests.
"""

import threading

import pytest
import requests
from requests.adapters import BaseAdapter


API_KEY = "10840b0f938942feafb7186de74b9682"
SECRET_KEY = "0vyTnawJRFn0Q9tWLTM188Olizc72JczHSXoIlsPQIc="
TIMESTAMP = 1519829567

REFERENCE_SIGNATURE = "6jpu6S4cQwEY4uLk+xELSe1RhajVJP0QEDpGWZ5T+U0="
POST_SIGNATURE = "WblgOTyJdN95XEnT4Bp63RJPArSLWO5FOybuqEPAVys="


class RecordingSender(BaseAdapter):
    """
    Adapter that records what would go over the wire.

    Answers 200, or a 302 to ``redirect_to`` for the first request when set.
    """

    def __init__(self, error=None, redirect_to=None):
        super().__init__()
        self.error = error
        self.redirect_to = redirect_to
        self.sent = []
        self.closed = False
        self._lock = threading.Lock()

    def send(self, request, **kwargs):
        if self.error is not None:
            raise self.error

        body = request.body
        if isinstance(body, str):
            body = body.encode('utf-8')

        with self._lock:
            self.sent.append({
                'method': request.method,
                'url': request.url,
                'headers': dict(request.headers),
                'body': body,
                'kwargs': kwargs,
            })

        response = requests.Response()
        response.status_code = 200
        response.url = request.url
        response.request = request
        response._content = b'{}'
        response._content_consumed = True
        if self.redirect_to is not None:
            response.status_code = 302
            response.headers['Location'] = self.redirect_to
            self.redirect_to = None
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def sender():
    """Create recording sender."""
    return RecordingSender()
