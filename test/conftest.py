from __future__ import annotations

import pytest

from httpbytes.converter import HttpConverter


@pytest.fixture
def converter():
    return HttpConverter()
