"""Library-wide defaults shared by the prompt configurations."""

from __future__ import annotations

DEFAULT_PAGE_SIZE = 7
"""Number of options shown at once by list prompts."""

DEFAULT_VIM_MODE = False
"""Whether hjkl navigation is enabled by default."""
