"""HTML formatter: a self-contained page with a bar chart and a table.

The rows are embedded as a JSON blob inside a ``<script>`` tag and drawn
as pure SVG, so the file opens from a local path with no network access.
"""

import html
import json
import math

from .base import BaseFormatter
from ..report import Report

# Bars drawn in the chart; the table always lists every row
MAX_BARS = 40


def _json_safe(value):
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class HtmlFormatter(BaseFormatter):
    """Render reports as a standalone HTML page."""

    def format(self, report: Report) -> str:
        rows = [[_json_safe(row[c]) for c in report.columns] for row in report.rows]
        data_json = json.dumps(
            {
                "kind": report.kind,
                "columns": list(report.columns),
                "rows": rows,
                "chart": chart_column(report),
                "max_bars": MAX_BARS,
            }
        )
        # "</" inside the blob would close the script element early
        return _build_html(html.escape(report.kind), data_json.replace("</", "<\\/")) + "\n"


def chart_column(report: Report):
    """The first numeric column, charted against the first column. None if there is none."""
    for column in report.columns[1:]:
        values = [row[column] for row in report.rows if row[column] is not None]
        if values and all(
            isinstance(v, (int, float)) and not isinstance(v, bool) for v in values
        ):
            return column
    return None


def _build_html(title: str, data_json: str) -> str:
    # The f-string uses {{ / }} to produce literal braces in CSS and JS.
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Evolution Insight: {title}</title>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; background: #0d1117; color: #c9d1d9; }}
#header {{ padding: 24px 32px; border-bottom: 1px solid #21262d; }}
#header h1 {{ font-size: 24px; color: #58a6ff; margin-bottom: 8px; }}
#header p {{ font-size: 14px; color: #8b949e; }}
#chart {{ padding: 24px 32px; }}
#chart svg text {{ fill: #c9d1d9; font-size: 11px; }}
#chart rect {{ fill: #58a6ff; }}
#rows {{ padding: 0 32px 24px; }}
table {{ border-collapse: collapse; width: 100%; font-size: 13px; }}
th, td {{ text-align: left; padding: 6px 12px; border-bottom: 1px solid #21262d; }}
th {{ color: #8b949e; font-weight: 600; }}
td.num {{ text-align: right; font-variant-numeric: tabular-nums; }}
footer {{ padding: 24px 32px; text-align: center; color: #484f58; font-size: 12px; border-top: 1px solid #21262d; }}
</style>
</head>
<body>
<div id="header">
  <h1 id="title"></h1>
  <p id="count"></p>
</div>
<div id="chart"></div>
<div id="rows"></div>
<footer>Generated by Evolution Insight</footer>

<script>
// All report data embedded at generation time.
const DATA = {data_json};

document.getElementById("title").textContent = DATA.kind;
document.getElementById("count").textContent = DATA.rows.length + " rows";

// ── Bar chart ────────────────────────────────────────────────────
(function() {{
  var el = document.getElementById("chart");
  if (DATA.chart === null || !DATA.rows.length) {{
    el.style.display = "none";
    return;
  }}
  var col = DATA.columns.indexOf(DATA.chart);
  var rows = DATA.rows.filter(function(r) {{ return r[col] !== null; }}).slice(0, DATA.max_bars);
  var mx = Math.max.apply(null, rows.map(function(r) {{ return Math.abs(r[col]); }})) || 1;
  var barH = 18, labelW = 320, width = 960;
  var parts = rows.map(function(r, i) {{
    var w = Math.max(1, Math.abs(r[col]) / mx * (width - labelW - 80));
    var y = i * (barH + 4);
    return '<text x="' + (labelW - 8) + '" y="' + (y + 13) + '" text-anchor="end">' + escapeHtml(String(r[0])) + '</text>' +
      '<rect x="' + labelW + '" y="' + y + '" width="' + w + '" height="' + barH + '"></rect>' +
      '<text x="' + (labelW + w + 6) + '" y="' + (y + 13) + '">' + r[col] + '</text>';
  }});
  el.innerHTML = '<svg xmlns="http://www.w3.org/2000/svg" width="' + width + '" height="' + rows.length * (barH + 4) + '">' +
    '<title>' + escapeHtml(DATA.chart) + '</title>' + parts.join("") + '</svg>';
}})();

// ── Table ────────────────────────────────────────────────────────
(function() {{
  var head = DATA.columns.map(function(c) {{ return '<th>' + escapeHtml(c) + '</th>'; }}).join("");
  var body = DATA.rows.map(function(r) {{
    return '<tr>' + r.map(function(v) {{
      var cls = typeof v === "number" ? ' class="num"' : '';
      return '<td' + cls + '>' + (v === null ? '' : escapeHtml(String(v))) + '</td>';
    }}).join("") + '</tr>';
  }}).join("");
  document.getElementById("rows").innerHTML = '<table><thead><tr>' + head + '</tr></thead><tbody>' + body + '</tbody></table>';
}})();

// ── Utility ──────────────────────────────────────────────────────
function escapeHtml(str) {{
  var div = document.createElement("div");
  div.appendChild(document.createTextNode(str));
  return div.innerHTML;
}}
</script>
</body>
</html>"""
