import json

import pytest
import requests

from dbhub.db import Connection


def make_response(body, status_code=200):
    """构造真实的 requests.Response，body 为 str 时原样写入，否则按 JSON 序列化。"""
    resp = requests.Response()
    resp.status_code = status_code
    raw = body if isinstance(body, str) else json.dumps(body)
    resp._content = raw.encode("utf-8")
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """记录 post 调用并返回预设响应；预设为异常时抛出。"""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, data=None, timeout=None):
        self.calls.append({"url": url, "data": data, "timeout": timeout})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def connect():
    def _connect(body=None, status_code=200, error=None, **kwargs):
        response = error if error is not None else make_response(body, status_code)
        session = FakeSession(response)
        conn = Connection(api_key="secret-key", server="https://test.example", session=session, **kwargs)
        return conn, session

    return _connect
