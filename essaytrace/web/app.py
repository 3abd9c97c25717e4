from __future__ import annotations

import asyncio
import html
import logging
from typing import List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, Field

from essaytrace.services.overlap import compute_overlap
from essaytrace.services.session_logs import (
    EventBy,
    EventName,
    WritingEvent,
    session_events,
    session_overlap,
)
from essaytrace.utils.highlight import render_html

logger = logging.getLogger("essaytrace.web.app")


class OverlapRequest(BaseModel):
    human_text: str
    ai_text: str
    min_match_words: Optional[int] = Field(default=None, ge=1)


class EventIn(BaseModel):
    session_id: str
    user_name: str = ""
    event_start_time: int
    event_name: EventName
    event_by: EventBy
    event_result: str = ""


class SessionOverlapRequest(BaseModel):
    events: List[EventIn]
    min_match_words: Optional[int] = Field(default=None, ge=1)


def create_web_app(*, settings) -> FastAPI:
    app = FastAPI(title="essaytrace overlap report")

    def _html_page(body: str) -> HTMLResponse:
        return HTMLResponse(f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>AI Overlap Report</title>
  <style>
    body{{font-family:Arial, sans-serif; max-width:1100px; margin:40px auto; padding:0 16px;}}
    .card{{border:1px solid #ddd; border-radius:12px; padding:16px;}}
    .cols{{display:grid; grid-template-columns:1fr 1fr; gap:16px;}}
    .text{{white-space:pre-wrap; background:#f8fafc; border:1px solid #e2e8f0; border-radius:8px; padding:12px;}}
    mark{{background:#fef08a;}}
    textarea{{width:100%; font-size:14px;}}
    button{{font-size:16px; padding:8px;}}
    .row{{margin:12px 0;}}
    small{{color:#666;}}
  </style>
</head>
<body>
  <div class="card">
    {body}
  </div>
</body>
</html>""")

    def _min_words(requested: Optional[int]) -> int:
        return requested if requested is not None else settings.min_match_words

    @app.get("/healthz")
    async def healthz():
        return PlainTextResponse("ok")

    @app.post("/api/overlap")
    async def api_overlap(req: OverlapRequest):
        result = await asyncio.to_thread(
            compute_overlap,
            req.human_text,
            req.ai_text,
            _min_words(req.min_match_words),
            settings.max_tokens,
        )
        return result.to_dict()

    @app.post("/api/sessions/{session_id}/overlap")
    async def api_session_overlap(session_id: str, req: SessionOverlapRequest):
        events = [WritingEvent(**ev.model_dump()) for ev in req.events]
        if not session_events(events, session_id):
            raise HTTPException(status_code=404, detail=f"No events for session {session_id}")

        texts, result = await asyncio.to_thread(
            session_overlap,
            events,
            session_id,
            _min_words(req.min_match_words),
            settings.max_tokens,
            settings.ai_separator,
        )
        payload = result.to_dict()
        payload["human_text"] = texts.human_text
        payload["ai_text"] = texts.ai_text
        return payload

    @app.get("/report", response_class=HTMLResponse)
    async def report_get():
        body = f"""
        <h2>Final submission vs AI output</h2>
        <p><small>Runs of {settings.min_match_words}+ shared words are highlighted in both texts.</small></p>
        <form action="/report" method="post">
          <div class="row">
            <label>Final human submission</label><br/>
            <textarea name="human_text" rows="12"></textarea>
          </div>
          <div class="row">
            <label>Total AI output</label><br/>
            <textarea name="ai_text" rows="12"></textarea>
          </div>
          <div class="row">
            <button type="submit">Compare</button>
          </div>
        </form>
        """
        return _html_page(body)

    @app.post("/report", response_class=HTMLResponse)
    async def report_post(
        human_text: str = Form(""),
        ai_text: str = Form(""),
    ):
        if not human_text and not ai_text:
            return _html_page("<h3>Error</h3><p>No submission or AI output given.</p>")

        result = await asyncio.to_thread(
            compute_overlap,
            human_text,
            ai_text,
            settings.min_match_words,
            settings.max_tokens,
        )
        logger.info(
            "Report: %d shared blocks, %d human ranges, %d ai ranges",
            len(result.blocks), len(result.human_ranges), len(result.ai_ranges),
        )

        human_html = render_html(human_text, result.human_ranges) if human_text else "<i>No final submission.</i>"
        ai_html = render_html(ai_text, result.ai_ranges) if ai_text else "<i>No AI responses.</i>"
        body = f"""
        <h2>Final submission vs AI output</h2>
        <p><small>{len(result.blocks)} shared passage(s), minimum {html.escape(str(settings.min_match_words))} words.</small></p>
        <div class="cols">
          <div><h4>Final human submission</h4><div class="text">{human_html}</div></div>
          <div><h4>Total AI output</h4><div class="text">{ai_html}</div></div>
        </div>
        <p><a href="/report">New comparison</a></p>
        """
        return _html_page(body)

    return app
