#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdpeek library.

Constants are organized by category:
1. Type Definitions - Literal types shared by options and the CLI
2. Rendering Defaults - Default option values for both emitters
3. Terminal Glyphs - Characters the terminal emitter draws with
4. HTML Page - Standalone page wrapper defaults
5. CLI and Configuration - Config file names and environment variables
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ColorSystemName = Literal["standard", "256", "truecolor"]
CssStyle = Literal["embedded", "none"]
RenderTarget = Literal["term", "html"]

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_THEME = "glow"
DEFAULT_COLOR_SYSTEM: ColorSystemName = "standard"
DEFAULT_RULE_WIDTH = 40
DEFAULT_LIST_INDENT = 2
DEFAULT_TABLE_INDENT = 1

DEFAULT_HTML_TITLE = "Document"
DEFAULT_HTML_LANGUAGE = "en"
DEFAULT_CSS_STYLE: CssStyle = "embedded"

# =============================================================================
# Terminal Glyphs
# =============================================================================

BULLET_MARKER = "• "
CHECKED_MARKER = "☑ "
UNCHECKED_MARKER = "☐ "
QUOTE_BAR = "│"
TABLE_COLUMN_SEPARATOR = " │ "
TABLE_RULE_CHAR = "─"
TABLE_RULE_JUNCTION = "┼"
RULE_CHAR = "─"
CODE_FENCE = "```"

# =============================================================================
# HTML Page
# =============================================================================

DEFAULT_PAGE_CSS = """
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
    line-height: 1.6;
    max-width: 860px;
    margin: 0 auto;
    padding: 2rem;
    color: #24292f;
}

pre {
    background-color: #f6f8fa;
    padding: 1rem;
    border-radius: 6px;
    overflow-x: auto;
}

code {
    font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace;
}

blockquote {
    border-left: 4px solid #d0d7de;
    padding-left: 1rem;
    margin-left: 0;
    color: #57606a;
}

.markdown-alert-note { border-left-color: #0969da; }
.markdown-alert-tip { border-left-color: #1a7f37; }
.markdown-alert-important { border-left-color: #8250df; }
.markdown-alert-warning { border-left-color: #9a6700; }
.markdown-alert-caution { border-left-color: #cf222e; }

table {
    border-collapse: collapse;
}

th, td {
    border: 1px solid #d0d7de;
    padding: 0.4rem 0.8rem;
}

.footnote-definition {
    font-size: 0.9em;
    margin-top: 1rem;
}
"""

# =============================================================================
# CLI and Configuration
# =============================================================================

DEFAULT_DOCUMENT = "README.md"
CONFIG_FILENAMES = [".mdpeek.toml", ".mdpeek.yaml", ".mdpeek.yml", ".mdpeek.json"]
CONFIG_ENV_VAR = "MDPEEK_CONFIG"
PYPROJECT_SECTION = "mdpeek"
DEFAULT_WATCH_DEBOUNCE = 0.2

CLEAR_SCREEN = "\x1b[2J\x1b[H"
