"""FastAPI server exposing the OBS browser-source overlay."""

from __future__ import annotations

import logging
from threading import Lock, Thread

from fastapi import Depends, FastAPI
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field
import uvicorn

from wheel_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from wheel_app.core.presentation import (
    ACTION_HIDE_OVERLAY,
    ACTION_SHOW_RESULT,
    ACTION_UPDATE_CHALLENGE,
)
from wheel_app.core.wheel_manager import WheelManager

logger = logging.getLogger(__name__)


class BrowserSourceChannel:
    """Presentation listener that keeps the latest overlay message for polling clients."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._sequence: int = 0
        self._message: dict | None = None
        self._challenge: dict | None = None
        self._acknowledgements: list[dict[str, str]] = []

    def __call__(self, message: dict) -> None:
        with self._lock:
            self._sequence += 1
            self._message = message
            action = message.get("action")
            if action == ACTION_UPDATE_CHALLENGE:
                self._challenge = message.get("challenge")
            elif action in (ACTION_SHOW_RESULT, ACTION_HIDE_OVERLAY):
                self._challenge = None

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            return {
                "sequence": self._sequence,
                "message": self._message,
                "challenge": self._challenge,
            }

    def acknowledge(self, event: str, surface: str) -> None:
        with self._lock:
            self._acknowledgements.append({"event": event, "surface": surface})
            del self._acknowledgements[:-20]
        logger.info("Overlay %s acknowledged %s", surface, event)

    def get_acknowledgements(self) -> list[dict[str, str]]:
        with self._lock:
            return list(self._acknowledgements)


class AckPayload(BaseModel):
    """Payload schema for acknowledgements sent back by the overlay page."""

    event: str = Field(min_length=1, max_length=64)
    surface: str = Field(default="obs", min_length=1, max_length=64)


_OVERLAY_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>ChallengeWheel Overlay</title>
    <style>
      html, body { margin: 0; padding: 0; background: transparent; overflow: hidden; }
      body { font-family: 'Segoe UI', system-ui, sans-serif; color: #f5f7ff; }
      #stage { position: absolute; inset: 0; display: flex; align-items: center; justify-content: center; opacity: 0; transition: opacity 800ms ease; }
      #stage.visible { opacity: 1; }
      .card { background: rgba(11, 17, 32, 0.85); border-radius: 1rem; padding: 1.5rem 2rem; min-width: 22rem; text-align: center; box-shadow: 0 0.5rem 1.5rem rgba(0, 0, 0, 0.5); }
      .hidden { display: none; }
      #reel { font-size: 2.4rem; font-weight: 700; }
      #hud-title { font-size: 1.6rem; font-weight: 700; }
      #hud-progress, #hud-time { font-size: 1.3rem; margin-top: 0.4rem; }
      #hud-time.warning { color: #ef4444; }
      .super { color: #facc15; font-weight: 800; letter-spacing: 0.1em; }
      #result-title { font-size: 2.2rem; font-weight: 800; }
      #result-title.success { color: #4ade80; }
      #result-title.failure { color: #f87171; }
      #result-detail { margin-top: 0.6rem; font-size: 1.2rem; }
    </style>
  </head>
  <body>
    <div id="stage">
      <section class="card hidden" id="spin-card">
        <div id="reel"></div>
        <div id="spin-super" class="super hidden">SUPER CHALLENGE</div>
      </section>
      <section class="card hidden" id="hud-card">
        <div id="hud-super" class="super hidden">SUPER</div>
        <div id="hud-title"></div>
        <div id="hud-progress"></div>
        <div id="hud-time"></div>
      </section>
      <section class="card hidden" id="result-card">
        <div id="result-title"></div>
        <div id="result-detail"></div>
      </section>
    </div>
    <script>
      const stage = document.getElementById('stage');
      const cards = {
        spin: document.getElementById('spin-card'),
        hud: document.getElementById('hud-card'),
        result: document.getElementById('result-card'),
      };
      let lastSequence = -1;
      let reelHandle = null;

      function showCard(name) {
        Object.entries(cards).forEach(([key, el]) => el.classList.toggle('hidden', key !== name));
        stage.classList.add('visible');
      }

      function formatTime(seconds) {
        const m = Math.floor(seconds / 60);
        const s = String(seconds % 60).padStart(2, '0');
        return `${m}:${s}`;
      }

      function formatAmount(value) {
        return Number(value || 0).toFixed(2);
      }

      function stopReel() {
        if (reelHandle) {
          clearTimeout(reelHandle);
          reelHandle = null;
        }
      }

      function startSpin(message) {
        stopReel();
        const pool = message.challenges || [];
        const selected = message.selectedChallenge;
        const durationMs = ((message.settings || {}).animationDuration || 3) * 1000;
        const reel = document.getElementById('reel');
        document.getElementById('spin-super').classList.add('hidden');
        showCard('spin');
        const started = Date.now();
        let delay = 60;
        function step() {
          if (Date.now() - started >= durationMs || pool.length === 0) {
            reel.textContent = `${selected.image} ${selected.title}`;
            document.getElementById('spin-super').classList.toggle('hidden', !selected.isSuper);
            reelHandle = null;
            return;
          }
          const entry = pool[Math.floor(Math.random() * pool.length)];
          reel.textContent = `${entry.image} ${entry.title}`;
          delay = Math.min(400, delay * 1.08);
          reelHandle = setTimeout(step, delay);
        }
        step();
      }

      function renderChallenge(challenge) {
        stopReel();
        document.getElementById('hud-super').classList.toggle('hidden', !challenge.isSuper);
        document.getElementById('hud-title').textContent = `${challenge.image} ${challenge.title}`;
        let progress = '';
        if (challenge.type === 'collect') {
          progress = `${challenge.progress} / ${challenge.target}`;
        } else if (challenge.type === 'max') {
          progress = `${challenge.progress} / max ${challenge.target}`;
        }
        if (challenge.isPaused) {
          progress = `${progress} (paused)`.trim();
        }
        document.getElementById('hud-progress').textContent = progress;
        const time = document.getElementById('hud-time');
        time.textContent = formatTime(challenge.timeRemaining);
        time.classList.toggle('warning', challenge.timeRemaining <= 10);
        showCard('hud');
      }

      function renderResult(message) {
        const title = document.getElementById('result-title');
        const detail = document.getElementById('result-detail');
        title.className = message.result;
        if (message.result === 'success') {
          title.textContent = 'Challenge completed!';
          detail.textContent = message.challenge.title;
        } else {
          const session = message.sessionStats || {};
          const donation = Number(message.donation || 0);
          title.textContent = `Failed! Donate ${formatAmount(donation)}`;
          detail.textContent = `Session total: ${formatAmount((session.amount || 0) + donation)}`;
        }
        showCard('result');
      }

      function hideOverlay() {
        stopReel();
        stage.classList.remove('visible');
        setTimeout(() => {
          fetch('/ack', {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ event: 'overlay-fade-complete', surface: 'obs' })
          }).catch(() => {});
        }, 800);
      }

      function handleMessage(message) {
        switch (message.action) {
          case 'spin':
            startSpin(message);
            break;
          case 'update-challenge':
            renderChallenge(message.challenge);
            break;
          case 'show-result':
            renderResult(message);
            break;
          case 'hide-overlay':
            hideOverlay();
            break;
        }
      }

      async function poll() {
        try {
          const response = await fetch('/state');
          const payload = await response.json();
          if (payload.sequence !== lastSequence) {
            const firstPoll = lastSequence === -1;
            lastSequence = payload.sequence;
            if (payload.message && !(firstPoll && payload.message.action === 'hide-overlay')) {
              if (firstPoll && payload.challenge) {
                renderChallenge(payload.challenge);
              } else {
                handleMessage(payload.message);
              }
            }
          }
        } catch (error) {
          console.error('Error polling overlay state:', error);
        }
      }

      setInterval(poll, 250);
      poll();
    </script>
  </body>
</html>
"""


def _get_dependency(value):
    def dependency():
        return value

    return dependency


def create_overlay_app(manager: WheelManager, channel: BrowserSourceChannel) -> FastAPI:
    """Create a FastAPI application wired to the manager and the browser-source channel."""
    app = FastAPI(title="ChallengeWheel Overlay", version="0.1.0")
    manager_dep = _get_dependency(manager)
    channel_dep = _get_dependency(channel)

    @app.get("/", response_class=HTMLResponse)
    def serve_overlay_page() -> str:
        return _OVERLAY_PAGE_HTML

    @app.get("/state")
    def get_state(source: BrowserSourceChannel = Depends(channel_dep)) -> dict[str, object]:
        return source.snapshot()

    @app.get("/stats")
    def get_stats(wheel_manager: WheelManager = Depends(manager_dep)) -> dict[str, object]:
        return {
            "sessionStats": wheel_manager.get_session_stats().to_dict(),
            "totalStats": wheel_manager.get_total_stats().to_dict(),
        }

    @app.post("/ack", status_code=202)
    def acknowledge(
        payload: AckPayload,
        source: BrowserSourceChannel = Depends(channel_dep),
    ) -> dict[str, object]:
        source.acknowledge(payload.event, payload.surface)
        return {"accepted": True}

    return app


def start_overlay_server(
    manager: WheelManager,
    channel: BrowserSourceChannel,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_overlay_app(manager, channel)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="OverlayServer", daemon=True)
    thread.start()
    logger.info("Overlay server listening on http://%s:%s/", host, port)
    return thread
