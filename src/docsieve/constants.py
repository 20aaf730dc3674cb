"""Centralized category / display / source constants."""

DEFAULT_DOCS_URL = "https://svelte.dev/llms-full.txt"
DEFAULT_DOCS_BASE_URL = "https://svelte.dev/docs/kit"
DEFAULT_CACHE_KEY = "svelte-docs"
DEFAULT_CACHE_TTL_SECONDS = 3600
DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_MAX_HEADING_DEPTH = 3
DEFAULT_SEARCH_LIMIT = 20

CONFIG_DIR_NAME = ".docsieve"

# -- Section categories --

CAT_RUNE = "rune"
CAT_DIRECTIVE = "directive"
CAT_BLOCK = "block"
CAT_ELEMENT = "element"
CAT_MODULE = "module"
CAT_API = "api"
CAT_CONCEPT = "concept"
CAT_CONFIG = "config"
CAT_MIGRATION = "migration"
CAT_ERROR = "error"
CAT_STYLING = "styling"
CAT_TESTING = "testing"
CAT_TYPESCRIPT = "typescript"
CAT_STORES = "stores"
CAT_CONTEXT = "context"
CAT_LIFECYCLE = "lifecycle"
CAT_LEGACY = "legacy"

VALID_CATEGORIES = frozenset({
    CAT_RUNE,
    CAT_DIRECTIVE,
    CAT_BLOCK,
    CAT_ELEMENT,
    CAT_MODULE,
    CAT_API,
    CAT_CONCEPT,
    CAT_CONFIG,
    CAT_MIGRATION,
    CAT_ERROR,
    CAT_STYLING,
    CAT_TESTING,
    CAT_TYPESCRIPT,
    CAT_STORES,
    CAT_CONTEXT,
    CAT_LIFECYCLE,
    CAT_LEGACY,
})

# category -> (icon glyph, click colour name)
CATEGORY_DISPLAY: dict[str, tuple[str, str]] = {
    CAT_RUNE: ("$", "magenta"),
    CAT_DIRECTIVE: (":", "bright_magenta"),
    CAT_BLOCK: ("{}", "cyan"),
    CAT_ELEMENT: ("<>", "bright_cyan"),
    CAT_MODULE: ("[]", "blue"),
    CAT_API: ("()", "bright_blue"),
    CAT_CONCEPT: ("*", "white"),
    CAT_CONFIG: ("#", "green"),
    CAT_MIGRATION: ("->", "bright_yellow"),
    CAT_ERROR: ("!", "red"),
    CAT_STYLING: ("~", "bright_green"),
    CAT_TESTING: ("?", "yellow"),
    CAT_TYPESCRIPT: ("ts", "bright_blue"),
    CAT_STORES: ("=", "bright_red"),
    CAT_CONTEXT: ("@", "bright_white"),
    CAT_LIFECYCLE: ("%", "bright_black"),
    CAT_LEGACY: ("x", "black"),
}


def category_display(category: str) -> tuple[str, str]:
    """Return (icon, colour) for a category, falling back to the concept entry."""
    return CATEGORY_DISPLAY.get(category, CATEGORY_DISPLAY[CAT_CONCEPT])
