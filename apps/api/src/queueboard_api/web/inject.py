"""Injects the "Clean All Queues" button into the dashboard root document.

The transform applies only to the root document path, only to ``text/html``
responses, and only when the body is a full HTML document.
"""

from __future__ import annotations

import json

from fastapi import FastAPI, Request
from starlette.responses import Response

DOCUMENT_MARKER = "<!DOCTYPE html>"
BUTTON_ID = "clean-all-queues-btn"

_BUTTON_SCRIPT = """
<script>
(function () {
  var API_URL = __API_URL__;

  function addCleanAllButton() {
    if (document.getElementById('__BUTTON_ID__')) {
      return;
    }
    var button = document.createElement('button');
    button.id = '__BUTTON_ID__';
    button.textContent = 'Clean All Queues';
    button.style.cssText = 'position: fixed; bottom: 20px; right: 20px; z-index: 9999;'
      + ' padding: 12px 24px; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);'
      + ' color: white; border: none; border-radius: 8px; cursor: pointer; font-weight: 600;'
      + ' font-size: 14px; box-shadow: 0 4px 15px rgba(102, 126, 234, 0.4);';

    button.onclick = async function () {
      var question = 'Are you sure you want to clean ALL queues?'
        + ' This will remove all jobs from all queues!';
      if (!confirm(question)) {
        return;
      }
      button.disabled = true;
      button.textContent = 'Cleaning...';
      try {
        var response = await fetch(API_URL, {
          method: 'POST',
          headers: {'Content-Type': 'application/json'},
          credentials: 'same-origin'
        });
        var result = await response.json();
        if (result.overallAttempted) {
          var lines = result.perQueue.map(function (r) {
            return r.name + ': ' + r.status + (r.error ? ' (' + r.error + ')' : '');
          });
          alert('Clean finished.\\n\\n' + (lines.join('\\n') || 'No queues registered.'));
          window.location.reload();
        } else {
          alert('Error cleaning queues: ' + (result.error || result.detail));
        }
      } catch (err) {
        alert('Error: ' + err.message);
      } finally {
        button.disabled = false;
        button.textContent = 'Clean All Queues';
      }
    };

    document.body.appendChild(button);
  }

  if (document.readyState === 'loading') {
    document.addEventListener('DOMContentLoaded', addCleanAllButton);
  } else {
    addCleanAllButton();
  }
})();
</script>
"""


def build_button_script(api_url: str) -> str:
    """Render the button script for the given clean-all endpoint URL."""
    return _BUTTON_SCRIPT.replace("__API_URL__", json.dumps(api_url)).replace(
        "__BUTTON_ID__", BUTTON_ID
    )


def inject_button(html: str, api_url: str) -> str:
    """Insert the button script before ``</body>`` of a full HTML document."""
    if DOCUMENT_MARKER not in html or "</body>" not in html:
        return html
    head, _, tail = html.rpartition("</body>")
    return head + build_button_script(api_url) + "</body>" + tail


def install_button_injection(app: FastAPI, *, root_path: str, api_url: str) -> None:
    """Install the response transform for the dashboard root document."""
    root = root_path.rstrip("/")
    root_paths = {root or "/", root + "/"}

    @app.middleware("http")
    async def inject_button_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
        response = await call_next(request)
        if request.url.path not in root_paths:
            return response
        if not response.headers.get("content-type", "").startswith("text/html"):
            return response

        body = b""
        async for chunk in response.body_iterator:
            body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

        html = body.decode("utf-8", errors="replace")
        # Prefer the proxy-facing URL when the app runs behind one
        proxy_url = getattr(request.state, "proxy_url", "")
        target = proxy_url.rstrip("/") + api_url if proxy_url else api_url
        transformed = inject_button(html, target)

        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() != "content-length"
        }
        return Response(
            content=transformed.encode("utf-8"),
            status_code=response.status_code,
            headers=headers,
        )
