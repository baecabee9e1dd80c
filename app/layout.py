"""
Shared HTML layout and styling helpers.
"""
from __future__ import annotations

import html

from fastapi.responses import HTMLResponse

SITE_NAME = "Muster Consultants"


def render_notice(notice) -> str:
    """Transient message box; `notice` has .message and .kind ('success' or 'error')."""
    if not notice:
        return ""
    kind = "error" if notice.kind == "error" else "success"
    return f'<div class="notice {kind}" role="status">{html.escape(notice.message)}</div>'


def render_page(title: str, body: str, admin: bool = False, notice=None, status_code: int = 200) -> HTMLResponse:
    """
    Shared layout: header with nav, optional notice box, footer.
    """
    signed_in_text = "Admin signed in" if admin else ""
    html_doc = f"""
    <!DOCTYPE html>
    <html>
      <head>
        <meta charset="utf-8" />
        <meta name="viewport" content="width=device-width, initial-scale=1" />
        <title>{html.escape(title)}</title>
        <style>
          * {{
            box-sizing: border-box;
          }}
          body {{
            font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
            margin: 0;
            padding: 0;
            background: #f8fafc;
            color: #1f2937;
          }}
          .page {{
            max-width: 960px;
            margin: 0 auto;
            padding: 1.5rem 1rem 3rem;
          }}
          header {{
            display: flex;
            justify-content: space-between;
            align-items: center;
            margin-bottom: 1.5rem;
            padding: 0.75rem 1rem;
            background: #0f172a;
            color: #f8fafc;
            border-radius: 0.75rem;
          }}
          header h1 {{
            font-size: 1.3rem;
            margin: 0;
          }}
          nav {{
            display: flex;
            gap: 0.6rem;
          }}
          nav a {{
            color: #f8fafc;
            text-decoration: none;
            padding: 6px 10px;
            border-radius: 8px;
            background: rgba(255,255,255,0.08);
          }}
          .signed-in {{
            font-size: 0.8rem;
            color: #cbd5e1;
          }}
          .card {{
            background: #ffffff;
            border-radius: 0.75rem;
            border: 1px solid #e2e8f0;
            padding: 1rem 1.25rem;
            margin-bottom: 1rem;
          }}
          label {{
            display: block;
            margin-top: 0.8rem;
            font-size: 0.95rem;
          }}
          input, textarea {{
            width: 100%;
            padding: 0.5rem;
            margin-top: 0.25rem;
            border-radius: 0.375rem;
            border: 1px solid #cbd5e1;
          }}
          textarea {{
            min-height: 6rem;
          }}
          button, .button {{
            margin-top: 1rem;
            padding: 0.6rem 1.2rem;
            border-radius: 0.5rem;
            border: none;
            background: #1d4ed8;
            color: #ffffff;
            font-weight: 600;
            cursor: pointer;
            text-decoration: none;
            display: inline-block;
          }}
          button.secondary, .button.secondary {{
            background: #64748b;
          }}
          button.danger {{
            background: #dc3545;
          }}
          .notice {{
            padding: 0.75rem 1rem;
            border-radius: 0.5rem;
            margin-bottom: 1rem;
            color: #ffffff;
          }}
          .notice.success {{
            background: #28a745;
          }}
          .notice.error {{
            background: #dc3545;
          }}
          .admin-list {{
            list-style: none;
            padding: 0;
          }}
          .admin-list li {{
            display: flex;
            justify-content: space-between;
            align-items: center;
            border-bottom: 1px solid #e2e8f0;
            padding: 0.6rem 0;
          }}
          .admin-list form {{
            display: inline;
          }}
          .admin-list button, .admin-list .button {{
            margin-top: 0;
          }}
          .muted {{
            color: #64748b;
            font-size: 0.85rem;
          }}
          footer {{
            margin-top: 2.5rem;
            padding: 1rem 0;
            border-top: 1px solid #e2e8f0;
            font-size: 0.9rem;
            text-align: center;
          }}
        </style>
      </head>
      <body>
        <div class="page">
          <header>
            <div>
              <h1>{html.escape(title)}</h1>
              <div class="signed-in">{signed_in_text}</div>
            </div>
            <nav>
              <a href="/">Home</a>
              <a href="/careers">Careers</a>
              <a href="/admin">Admin</a>
            </nav>
          </header>
          <main>
            {render_notice(notice)}
            {body}
          </main>
          <footer>
            <div><strong>(c) {SITE_NAME}.</strong> All rights reserved.</div>
          </footer>
        </div>
      </body>
    </html>
    """
    return HTMLResponse(content=html_doc, status_code=status_code)
