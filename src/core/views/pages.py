"""
Server-rendered HTML for the dashboard shell and the map's loading/error states.
"""
from datetime import datetime
from typing import Optional

from jinja2 import Environment

from core.models.analysis_result import AnalysisResult
from core.models.map_state import MapStatus
from core.models.report_state import ReportState
from core.models.view_mode import ViewMode
from core.views.list_view import ListRow

_env = Environment(autoescape=True)

TABS = [
    (ViewMode.MAP, "Map view"),
    (ViewMode.COMBINED, "Combined view"),
    (ViewMode.LIST, "List view"),
]


def render_dashboard(
    view: ViewMode,
    rows: list[ListRow],
    filter_text: str,
    report_state: ReportState,
    report: Optional[AnalysisResult],
    report_severity: Optional[str],
    app_name: str,
    refreshed_at: Optional[datetime] = None,
) -> str:
    return _env.from_string(_DASHBOARD_TEMPLATE).render(
        app_name=app_name,
        view=view.value,
        tabs=[(mode.value, label) for mode, label in TABS],
        rows=rows,
        count=len(rows),
        filter_text=filter_text,
        report_state=report_state.value,
        report=report,
        report_severity=report_severity,
        refreshed_at=(refreshed_at or datetime.now()).strftime("%H:%M:%S"),
    )


def render_map_status(status: MapStatus, error: Optional[str] = None) -> str:
    """Placeholder document shown in the map frame until the widget is ready."""
    return _env.from_string(_MAP_STATUS_TEMPLATE).render(
        status=status.value,
        error=error or "",
    )


_MAP_STATUS_TEMPLATE = """<!DOCTYPE html>
<html lang="vi">
<head>
<meta charset="UTF-8">
{% if status == "loading" %}<meta http-equiv="refresh" content="1">{% endif %}
<style>
body{margin:0;height:100vh;display:flex;align-items:center;justify-content:center;font-family:sans-serif}
.loading{background:#f1f5f9;color:#475569;width:100%;height:100%;display:flex;flex-direction:column;align-items:center;justify-content:center}
.spinner{width:40px;height:40px;border-radius:50%;border-bottom:2px solid #2563eb;animation:spin 1s linear infinite;margin-bottom:16px}
@keyframes spin{to{transform:rotate(360deg)}}
.error{background:#fef2f2;width:100%;height:100%;display:flex;align-items:center;justify-content:center}
.card{background:#fff;padding:24px;border-radius:8px;box-shadow:0 10px 25px rgba(0,0,0,.15);max-width:420px;text-align:center}
.card h2{color:#ef4444;margin:0 0 8px}
.card button{padding:8px 16px;background:#2563eb;color:#fff;border:0;border-radius:4px;cursor:pointer}
</style>
</head>
<body>
{% if status == "error" %}
<div class="error" id="map-error">
  <div class="card">
    <h2>Lỗi tải bản đồ</h2>
    <p>{{ error }}</p>
    <button id="map-reload" onclick="reloadMap()">Tải lại trang</button>
  </div>
</div>
<script>
function reloadMap() {
  fetch('/api/map/reload', {method: 'POST'}).then(function() {
    (window.parent || window).location.reload();
  });
}
</script>
{% else %}
<div class="loading" id="map-loading">
  <div class="spinner"></div>
  <p>Đang tải bản đồ...</p>
</div>
{% endif %}
</body>
</html>
"""


_DASHBOARD_TEMPLATE = """<!DOCTYPE html>
<html lang="vi">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{{ app_name }}</title>
<style>
*{box-sizing:border-box}
body{margin:0;height:100vh;display:flex;flex-direction:column;background:#f1f5f9;font-family:sans-serif;color:#1e293b}
header{background:#fff;border-bottom:1px solid #cbd5e1;padding:0 24px;height:56px;display:flex;align-items:center}
.tab{padding:8px 24px;font-size:14px;border:1px solid #cbd5e1;background:#f8fafc;color:#475569;cursor:pointer}
.tab+.tab{border-left:0}
.tab.active{background:#facc15;color:#0f172a;border-color:#eab308}
main{flex:1;padding:16px;overflow:hidden;min-height:0}
.layout-combined{height:100%;display:grid;grid-template-columns:2fr 1fr;gap:16px}
.layout-map,.layout-list{height:100%}
.layout-list{max-width:1024px;margin:0 auto;display:flex;flex-direction:column;gap:16px}
.sidebar{display:flex;flex-direction:column;gap:16px;min-height:0}
iframe.map{width:100%;height:100%;border:0;border-radius:8px;background:#f1f5f9}
.panel{background:#fff;border:1px solid #e2e8f0;border-radius:8px;box-shadow:0 1px 3px rgba(0,0,0,.08);display:flex;flex-direction:column;min-height:0}
.panel-head{padding:16px;border-bottom:1px solid #e2e8f0;display:flex;justify-content:space-between;align-items:center;background:#f8fafc}
.panel-head h2{font-size:16px;margin:0}
.list-body{flex:1;overflow-y:auto}
table{width:100%;font-size:14px;border-collapse:collapse}
th{text-align:left;color:#64748b;font-weight:500;background:#f8fafc;padding:12px 16px;position:sticky;top:0}
td{padding:12px 16px;border-top:1px solid #f1f5f9}
tr.row{cursor:pointer}
tr.row:hover{background:#eff6ff}
tr.row.selected{background:#eff6ff;box-shadow:inset 4px 0 0 #3b82f6}
.text-critical{color:#dc2626}.text-warning{color:#ca8a04}.text-normal{color:#059669}
.num{text-align:right;font-family:monospace}
.rain{color:#2563eb;font-weight:bold}.muted{color:#94a3b8}
.region{font-size:12px;color:#64748b}
.report-prompt{background:linear-gradient(135deg,#312e81,#581c87);color:#fff;border-radius:8px;padding:24px;text-align:center}
.report-prompt button{background:#fff;color:#312e81;border:0;border-radius:999px;padding:8px 24px;font-weight:bold;cursor:pointer}
.report-body{padding:16px;overflow-y:auto;max-height:300px}
.label{font-size:12px;font-weight:bold;color:#94a3b8;text-transform:uppercase;letter-spacing:.05em}
.risk{font-size:18px;font-weight:bold}
.risk.high{color:#dc2626}.risk.moderate{color:#ca8a04}
footer{background:#fff;border-top:1px solid #e2e8f0;padding:8px 24px;font-size:12px;color:#64748b;display:flex;justify-content:space-between}
footer .claim{font-weight:900;color:#dc2626;text-transform:uppercase}
@media (max-width:1023px){.layout-combined{grid-template-columns:1fr;grid-template-rows:50vh auto}}
</style>
</head>
<body data-view="{{ view }}">
<header>
  <nav>
  {% for value, label in tabs %}
    <button class="tab{% if value == view %} active{% endif %}" data-view="{{ value }}" onclick="setView('{{ value }}')">{{ label }}</button>
  {% endfor %}
  </nav>
</header>

{% macro map_frame() %}
<iframe class="map" id="sensor-map" src="/api/map/html" title="Sensor map"></iframe>
{% endmacro %}

{% macro sensor_list() %}
<section class="panel" id="sensor-list" style="flex:1">
  <div class="panel-head">
    <h2 id="list-title">Device List ({{ count }})</h2>
    <input id="list-filter" type="text" placeholder="Search location..." value="{{ filter_text }}" oninput="setFilter(this.value)">
  </div>
  <div class="list-body">
    <table>
      <thead><tr><th>Status</th><th>Location</th><th class="num">Rain (1h)</th><th class="num">Level</th><th>Battery</th></tr></thead>
      <tbody id="list-rows">
      {% for row in rows %}
        <tr class="row{% if row.selected %} selected{% endif %}" data-sensor-id="{{ row.sensor_id }}" onclick="activateRow(this.dataset.sensorId)">
          <td class="{{ row.status_class }}">{{ row.status }}</td>
          <td><div>{{ row.name }}</div><div class="region">{{ row.region }}</div></td>
          <td class="num">{% if row.rainfall_1h == "-" %}<span class="muted">-</span>{% else %}<span class="rain">{{ row.rainfall_1h }}</span>{% endif %}</td>
          <td class="num">{{ row.water_level }}</td>
          <td>{{ row.battery }}</td>
        </tr>
      {% endfor %}
      </tbody>
    </table>
  </div>
</section>
{% endmacro %}

{% macro ai_report() %}
<section id="ai-report" data-state="{{ report_state }}">
{% if report_state == "idle" %}
  <div class="report-prompt">
    <h3>AI Risk Assessment</h3>
    <p>Use Gemini AI to analyze all sensor data across Vietnam and generate a flood risk report.</p>
    <button onclick="generateReport()">Generate Report</button>
  </div>
{% elif report_state == "in_flight" %}
  <div class="panel" style="padding:24px;text-align:center">
    <p><b>Analyzing sensor data...</b></p>
    <p class="muted">This uses Gemini 2.5 Flash</p>
  </div>
{% else %}
  <div class="panel" style="border-left:4px solid #6366f1">
    <div class="panel-head">
      <h2>Flood Risk Analysis</h2>
      <button onclick="resetReport()">Reset</button>
    </div>
    <div class="report-body">
      <div class="label">Overall Risk</div>
      <div class="risk {{ report_severity }}" id="risk-level">{{ report.risk_level }}</div>
      <div class="label" style="margin-top:12px">Summary</div>
      <p>{{ report.summary }}</p>
      <div class="label">Recommendations</div>
      <ul id="recommendations">
      {% for rec in report.recommendations %}<li>{{ rec }}</li>{% endfor %}
      </ul>
    </div>
  </div>
{% endif %}
</section>
{% endmacro %}

<main>
{% if view == "combined" %}
  <div class="layout-combined">
    <div>{{ map_frame() }}</div>
    <div class="sidebar">{{ ai_report() }}{{ sensor_list() }}</div>
  </div>
{% elif view == "map" %}
  <div class="layout-map">{{ map_frame() }}</div>
{% else %}
  <div class="layout-list">{{ ai_report() }}{{ sensor_list() }}</div>
{% endif %}
</main>

<footer>
  <div class="claim">Hoàng Sa, Trường Sa là của Việt Nam 🇻🇳</div>
  <div>Data refreshed: {{ refreshed_at }}</div>
</footer>

<script>
function send(method, url, body) {
  var opts = {method: method, headers: {'Content-Type': 'application/json'}};
  if (body !== undefined) opts.body = JSON.stringify(body);
  return fetch(url, opts);
}
function setView(view) {
  send('PUT', '/api/shell/view', {view: view}).then(function() { location.reload(); });
}
function activateRow(id) {
  send('POST', '/api/sensors/' + encodeURIComponent(id) + '/activate?viewport_width=' + window.innerWidth)
    .then(function() { location.reload(); });
}
function cell(className, children) {
  var td = document.createElement('td');
  td.className = className;
  children.forEach(function(child) { td.appendChild(child); });
  return td;
}
function el(tag, className, text) {
  var node = document.createElement(tag);
  if (className) node.className = className;
  node.textContent = text;
  return node;
}
function buildRow(row) {
  var tr = document.createElement('tr');
  tr.className = 'row' + (row.selected ? ' selected' : '');
  tr.dataset.sensorId = row.sensor_id;
  tr.onclick = function() { activateRow(this.dataset.sensorId); };
  var rain = row.rainfall_1h === '-' ? el('span', 'muted', '-') : el('span', 'rain', row.rainfall_1h);
  tr.appendChild(cell(row.status_class, [document.createTextNode(row.status)]));
  tr.appendChild(cell('', [el('div', '', row.name), el('div', 'region', row.region)]));
  tr.appendChild(cell('num', [rain]));
  tr.appendChild(cell('num', [document.createTextNode(row.water_level)]));
  tr.appendChild(cell('', [document.createTextNode(row.battery)]));
  return tr;
}
function setFilter(text) {
  send('PUT', '/api/sensors/filter', {text: text}).then(function(r) { return r.json(); }).then(function(data) {
    document.getElementById('list-title').textContent = data.title;
    var body = document.getElementById('list-rows');
    body.innerHTML = '';
    data.rows.forEach(function(row) { body.appendChild(buildRow(row)); });
  });
}
function generateReport() {
  var section = document.getElementById('ai-report');
  section.dataset.state = 'in_flight';
  section.innerHTML = '<div class="panel" style="padding:24px;text-align:center"><p><b>Analyzing sensor data...</b></p></div>';
  send('POST', '/api/report').then(function() { location.reload(); });
}
function resetReport() {
  send('DELETE', '/api/report').then(function() { location.reload(); });
}
</script>
</body>
</html>
"""
