"""Invoke helpers — call sync or async stages uniformly.

Pipeline stages and lifecycle hooks can be ``def`` or ``async def``.
Any code that calls user-provided code goes through :func:`invoke` so
the sync/async check lives in exactly one place.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        class Lookup:
            def process(self, model):
                return USERS[model.id]

        class RemoteLookup:
            async def process(self, model):
                return await client.fetch_user(model.id)
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
