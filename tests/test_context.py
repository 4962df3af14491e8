from __future__ import annotations

import pytest

from imagepipe.context import StepContext
from imagepipe.errors import StepCancelledError


def test_no_deadline():
    ctx = StepContext()
    ctx.check()
    assert ctx.remaining() is None


def test_cancel():
    ctx = StepContext()
    ctx.cancel()

    with pytest.raises(StepCancelledError, match="cancelled"):
        ctx.check()


def test_deadline():
    ctx = StepContext(timeout=0)

    with pytest.raises(StepCancelledError, match="deadline exceeded"):
        ctx.check()
