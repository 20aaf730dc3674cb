"""Shared test fixtures."""

import pytest

from docsieve.config import Settings
from docsieve.sources.cache import MemoryCache

SAMPLE_DOCS = """\
preamble that is discarded

# Overview
Svelte is a UI framework that compiles components.

# $state
The `$state` rune declares reactive state.

```svelte
<script>
  let count = $state(0);
</script>
```

## $derived
Derived state is declared with the `$derived` rune.

# Routing
Routing in SvelteKit is file based.

# $app/stores
Legacy stores module.

# Empty heading
# Actions
Use `use:tooltip` to attach an action.
"""


class FakeFetcher:
    """Returns canned text and counts calls."""

    def __init__(self, text: str = SAMPLE_DOCS, error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = 0

    def fetch(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def sample_docs():
    return SAMPLE_DOCS


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def make_fetcher():
    """Factory for fetchers with custom text or a canned error."""
    return FakeFetcher


@pytest.fixture
def memory_cache():
    return MemoryCache()


@pytest.fixture
def settings():
    return Settings()
