import asyncio
from types import SimpleNamespace

import pytest

from nup_toolkit.composer.errors import CompositionError


class GatedCompose:
    """
    Stand-in for compose_document_async whose calls block until released.

    Calls are keyed by (source bytes, pages per sheet). Sources starting
    with b"bad" or listed in ``failing`` fail with a CompositionError once released.
    """

    def __init__(self, open_by_default: bool = False):
        self.open_by_default = open_by_default
        self.calls = []
        self.failing = set()
        self._gates = {}

    def gate(self, data: bytes, pages_per_sheet: int = 1) -> asyncio.Event:
        key = (data, pages_per_sheet)
        if key not in self._gates:
            self._gates[key] = asyncio.Event()
            if self.open_by_default:
                self._gates[key].set()
        return self._gates[key]

    def release(self, data: bytes, pages_per_sheet: int = 1) -> None:
        self.gate(data, pages_per_sheet).set()

    def release_all(self) -> None:
        for gate in self._gates.values():
            gate.set()

    async def __call__(self, data, settings):
        self.calls.append((data, settings))
        await self.gate(data, settings.pages_per_sheet).wait()
        if data.startswith(b"bad") or data in self.failing:
            raise CompositionError("Failed to place page 1: damaged")
        return SimpleNamespace(output_bytes=data + f"|{settings.pages_per_sheet}".encode())


@pytest.fixture
def gated_compose():
    return GatedCompose()


@pytest.fixture
def open_compose():
    return GatedCompose(open_by_default=True)
