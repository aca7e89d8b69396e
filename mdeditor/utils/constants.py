APP_ORG = "MarkdownEditor"
APP_NAME = "Markdown Editor"

# Light palette baked in; ThemeService.preview_css() produces themed variants.
CSS_PREVIEW = """
:root { --bg:#f9f7f7; --fg:#2d3436; --muted:#636e72; --code:#f0f0f0; --border:#dfe6e9; --link:#0984e3; }
html,body { background:var(--bg); color:var(--fg); }
body { font-family: -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; margin: 1.25rem; line-height: 1.55; }
h1,h2,h3,h4,h5,h6 { margin-top: 1.2em; }
pre { padding:.75rem; overflow:auto; border-radius:8px; background:var(--code); }
code { background:var(--code); padding:.15rem .3rem; border-radius:6px; }
blockquote { border-left:4px solid var(--border); margin:1em 0; padding:.25em .75em; color:var(--muted); }
table { border-collapse: collapse; }
th, td { border:1px solid var(--border); padding:.4rem .6rem; }
a { color:var(--link); text-decoration:none; } a:hover { text-decoration:underline; }
del { color:var(--muted); }
hr { border:none; border-top:1px solid var(--border); margin:1.5rem 0; }
ul,ol { padding-left:1.5rem; }
.footnote { font-size:.9em; color:var(--muted); }
"""

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<style>{css}</style>
</head>
<body>
{body}
</body>
</html>
"""

MATHJAX_SCRIPTS = """
<script>
window.MathJax = {
  tex: { inlineMath: [['\\\\(', '\\\\)']], displayMath: [['\\\\[', '\\\\]']] },
  options: { skipHtmlTags: ['script', 'noscript', 'style', 'textarea', 'pre', 'code'] }
};
</script>
<script id="MathJax-script" async src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-chtml.js"></script>
"""

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_SPLITTER = "window/splitter"
SETTINGS_RECENTS = "file/recent"
SETTINGS_DARK_MODE = "theme/dark_mode"
SETTINGS_AUTOSAVE_ENABLED = "autosave/enabled"
SETTINGS_AUTOSAVE_DELAY = "autosave/delay_seconds"

MAX_RECENTS = 10
DEFAULT_AUTOSAVE_DELAY = 5
PREVIEW_DEBOUNCE_MS = 300

MARKDOWN_FILTER = "Markdown Files (*.md *.markdown);;All Files (*)"
