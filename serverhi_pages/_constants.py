"""Common literal values used across serverhi_pages.

These constants keep the article schema vocabulary, filenames, and editorial
defaults centralized so the validator, repository, templates, and tests can
import the same values without drifting. Intended for internal use within the
serverhi_pages package.

Examples
--------
>>> from serverhi_pages import _constants
>>> "docker" in _constants.ARTICLE_CATEGORIES
True
>>> _constants.ARTICLE_FILENAME
'index.md'
"""

ARTICLE_CATEGORIES = (
    "docker",
    "linux",
    "server-config",
    "devops",
    "security",
    "troubleshooting",
)
DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")

ARTICLE_FILENAME = "index.md"
DEFAULT_AUTHOR = "ServerHi Editorial Team"
DEFAULT_CATEGORY_ICON = "\N{PAGE FACING UP}"

DEFAULT_POSTS_PER_PAGE = 10
DEFAULT_RELATED_COUNT = 3
DEFAULT_FEATURED_COUNT = 6
WORDS_PER_MINUTE = 200

SEARCH_INDEX_FILENAME = "search-index.json"
SITEMAP_FILENAME = "sitemap.xml"
RSS_FILENAME = "rss.xml"
