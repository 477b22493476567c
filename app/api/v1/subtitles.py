"""Stateless subtitle tools: reflow, SRT rendering and timing advice."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.core.config import settings
from app.schemas import (
    EntriesResponse,
    ReflowRequest,
    SerializeRequest,
    SubtitleEntrySchema,
    TimingRequest,
    TimingResponse,
)
from app.services.reflow import reflow_entries
from app.services.srt_writer import serialize_srt
from app.services.timing import is_timing_too_short, recommended_end, required_duration

router = APIRouter()


@router.post("/reflow", response_model=EntriesResponse)
async def reflow(request: ReflowRequest):
    """Split entries longer than the character budget into timed lines."""
    entries = reflow_entries(
        (entry.to_entry() for entry in request.entries), request.max_chars_per_line
    )
    return EntriesResponse(entries=[SubtitleEntrySchema.from_entry(entry) for entry in entries])


@router.post("/serialize", response_class=PlainTextResponse)
async def serialize(request: SerializeRequest):
    """Render entries as SRT text in the given order."""
    return serialize_srt(entry.to_entry() for entry in request.entries)


@router.post("/timing", response_model=TimingResponse)
async def timing(request: TimingRequest):
    """Check whether an entry is displayed long enough to be read."""
    cps = settings.chars_per_second
    return TimingResponse(
        too_short=is_timing_too_short(request.text, request.start, request.end, cps),
        required_duration=required_duration(request.text, cps),
        recommended_end=recommended_end(request.text, request.start, cps),
        chars_per_second=cps,
    )
