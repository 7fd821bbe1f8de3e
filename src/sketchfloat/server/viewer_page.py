from __future__ import annotations

# ruff: noqa: E501
import json

from sketchfloat.protocol.constants import SPRITE_LIFETIME_MS


def render_viewer_html(ws_path: str) -> str:
    """
    Developer viewer HTML (single page app).

    Connects to the relay and animates every sprite it receives. It never
    sends anything, so it can sit next to real clients without disturbing them.
    """
    return f"""
<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width,initial-scale=1" />
    <title>sketchfloat viewer</title>
    <style>
      html, body {{ height: 100%; margin: 0; background: #0b0f14; color: #e6edf3; font-family: ui-sans-serif, system-ui, -apple-system; }}
      #bar {{ position: fixed; top: 0; left: 0; right: 0; padding: 10px 12px; background: rgba(11,15,20,0.85); border-bottom: 1px solid rgba(255,255,255,0.08); z-index: 1; }}
      #status {{ font-size: 12px; opacity: 0.9; }}
      canvas {{ position: absolute; inset: 0; }}
    </style>
  </head>
  <body>
    <div id="bar">
      <div><strong>sketchfloat</strong> relay viewer</div>
      <div id="status">connecting…</div>
    </div>
    <canvas id="view"></canvas>
    <script>
      const wsPath = {json.dumps(ws_path)};
      const lifetimeMs = {SPRITE_LIFETIME_MS};
      const statusEl = document.getElementById("status");
      const canvas = document.getElementById("view");
      const ctx = canvas.getContext("2d");
      const sprites = [];
      let received = 0;

      function resize() {{
        canvas.width = window.innerWidth;
        canvas.height = window.innerHeight;
      }}
      window.addEventListener("resize", resize);
      resize();

      function step() {{
        const now = performance.now();
        ctx.clearRect(0, 0, canvas.width, canvas.height);
        for (let i = sprites.length - 1; i >= 0; i--) {{
          const s = sprites[i];
          if (now - s.born > lifetimeMs) {{
            sprites.splice(i, 1);
            continue;
          }}
          s.x += s.vx;
          s.y += s.vy;
          // bounce off the edges
          if (s.x - s.w / 2 < 0 || s.x + s.w / 2 > canvas.width) s.vx = -s.vx;
          if (s.y - s.h / 2 < 0 || s.y + s.h / 2 > canvas.height) s.vy = -s.vy;
          s.rot += s.spin;
          ctx.save();
          ctx.translate(s.x, s.y);
          ctx.rotate(s.rot);
          ctx.drawImage(s.img, -s.w / 2, -s.h / 2, s.w, s.h);
          ctx.restore();
        }}
        requestAnimationFrame(step);
      }}
      requestAnimationFrame(step);

      function addSprite(msg) {{
        const img = new Image();
        img.onload = () => {{
          sprites.push({{
            img, x: msg.x, y: msg.y, w: msg.width, h: msg.height,
            vx: msg.vx || 0, vy: msg.vy || 0,
            rot: 0, spin: (Math.random() - 0.5) * 0.1, born: performance.now(),
          }});
        }};
        img.src = msg.src;
      }}

      function wsUrl() {{
        const proto = (location.protocol === "https:") ? "wss" : "ws";
        return `${{proto}}://${{location.host}}${{wsPath}}`;
      }}

      function connect() {{
        statusEl.textContent = `connecting… ${{wsUrl()}}`;
        const ws = new WebSocket(wsUrl());
        ws.onopen = () => {{
          statusEl.textContent = "connected";
        }};
        ws.onclose = () => {{
          statusEl.textContent = "disconnected; retrying…";
          setTimeout(connect, 500);
        }};
        ws.onerror = () => {{
          // onclose will handle reconnect
        }};
        ws.onmessage = async (ev) => {{
          // the relay sends binary frames (Blob); accept text too
          const raw = (typeof ev.data === "string") ? ev.data : await ev.data.text();
          let msg;
          try {{ msg = JSON.parse(raw); }} catch {{ return; }}
          if (!msg || typeof msg.src !== "string") return;
          received += 1;
          statusEl.textContent = `connected · ${{received}} sprite(s) received`;
          addSprite(msg);
        }};
      }}
      connect();
    </script>
  </body>
</html>
"""
