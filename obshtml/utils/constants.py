APP_ORG = "ObsHtml"
APP_NAME = "ObsHtml Companion"

PLUGIN_NAME = "[obs.html companion]"

# View modes understood by the rendering surface
MODE_SOURCE = "source"
MODE_PREVIEW = "preview"

# Render-readiness polling (ms); overridable via the [export] config section
RENDER_INITIAL_DELAY_MS = 50
RENDER_RETRY_INTERVAL_MS = 100
RENDER_MAX_ATTEMPTS = 5
RENDER_DEBOUNCE_MS = 150

POST_EXPORT_GENERATOR = "obsidianhtml"

NOTICE_EXPORT_START_MS = 5000
NOTICE_SHELL_START_MS = 7000
NOTICE_SHELL_DONE_MS = 5000

MARKDOWN_SUFFIX = ".md"
EXPORT_SUFFIX = ".html"

CSS_PREVIEW = """
body { font-family: system-ui, -apple-system, "Segoe UI", Roboto, sans-serif; margin: 1rem 1.5rem; line-height: 1.6; color: #1f2328; }
.markdown-preview-section { max-width: 46rem; }
h1, h2, h3 { border-bottom: 1px solid #d8dee4; padding-bottom: .2em; }
pre, code { background: #f6f8fa; border-radius: 4px; }
pre { padding: .6rem .8rem; overflow: auto; }
code { padding: .1rem .25rem; }
blockquote { margin: .8em 0; padding: 0 .8em; border-left: 3px solid #d0d7de; color: #57606a; }
table { border-collapse: collapse; }
th, td { border: 1px solid #d0d7de; padding: .3rem .55rem; }
a { color: #0969da; }
a.wikilink { text-decoration: none; border-bottom: 1px dotted #0969da; }
li.task-list-item { list-style: none; }
.arithmatex { font-family: "Latin Modern Math", "STIX Two Math", serif; }
"""

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<style>{css}</style>
</head>
<body>
<div class="markdown-preview-section">
{body}
</div>
</body>
</html>
"""

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_SPLITTER = "window/splitter"
SETTINGS_PLUGIN_DATA = "plugins/{plugin_id}/data"
