from __future__ import annotations

import pytest

from gfwtags.test.fakes import RELEASES, RESOLVABLE, FakeUpstream


@pytest.fixture
def upstream() -> FakeUpstream:
    """Upstream with four releases; every non-rc release resolves."""
    fake = FakeUpstream()
    fake.set_releases(RELEASES)
    for token in RESOLVABLE:
        fake.add_resolvable(token)
    return fake
