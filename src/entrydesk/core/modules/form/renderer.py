"""Application form rendering with Pillow."""

import asyncio
import time
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog
from PIL import Image, ImageDraw, ImageFont

from entrydesk.core.modules.form.models import RenderResult

logger = structlog.get_logger(__name__)

BLANK_FORM_SIZE = (1240, 1754)  # A4 at 150 dpi
MARGIN = 80
LINE_HEIGHT = 56


def form_file_name(entry_id: str) -> str:
    return f"form_{entry_id}_{int(time.time() * 1000)}.png"


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%d-%m-%Y")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_label(key: str) -> str:
    return key.replace("_", " ").title()


def draw_form(
    destination: Path, title: str, entry_id: str, payload: dict[str, Any], template_path: str | None = None
) -> Path:
    """Draw the form fields onto the template (or a blank page) and save it as PNG.

    Raises:
        OSError: If the template cannot be read or the file cannot be written
    """
    if template_path:
        with Image.open(template_path) as template:
            image = template.convert("RGB")
    else:
        image = Image.new("RGB", BLANK_FORM_SIZE, "white")

    draw = ImageDraw.Draw(image)
    title_font = ImageFont.load_default(size=48)
    text_font = ImageFont.load_default(size=32)

    draw.text((MARGIN, MARGIN), title, fill="black", font=title_font)
    draw.text((image.width - MARGIN, MARGIN + 80), f"Application No: {entry_id}", fill="blue", font=text_font, anchor="ra")

    y = MARGIN + 180
    for key, value in payload.items():
        draw.text((MARGIN, y), f"{format_label(key)}: {format_value(value)}", fill="black", font=text_font)
        y += LINE_HEIGHT

    destination.parent.mkdir(parents=True, exist_ok=True)
    image.save(destination, format="PNG")
    return destination


class PillowFormRenderer:
    """Renders application forms for one registration kind into `forms_path`."""

    def __init__(self, forms_path: str, title: str, template_path: str | None = None) -> None:
        self._forms_path = Path(forms_path)
        self._title = title
        self._template_path = template_path

    async def render(self, entry_id: str, payload: dict[str, Any]) -> RenderResult:
        file_name = form_file_name(entry_id)
        try:
            await asyncio.to_thread(
                draw_form, self._forms_path / file_name, self._title, entry_id, payload, self._template_path
            )
        except OSError as e:
            logger.exception("form_render_failed", entry_id=entry_id)
            return RenderResult.failed(f"Failed to generate application form: {e}")

        logger.debug("form_rendered", entry_id=entry_id, file_name=file_name)
        return RenderResult.ok(file_name)
