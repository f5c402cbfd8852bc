from pathlib import Path
from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from entrydesk.core.core import Service
from entrydesk.core.modules.entry.models import ENTRY_KINDS, EntryKind
from entrydesk.core.modules.form.renderer import PillowFormRenderer


class FormService(Service):
    """Provides the application form renderer for each registration kind."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._renderers: dict[EntryKind, PillowFormRenderer] = {}

    async def on_start(self) -> None:
        """Create the output directory for rendered forms."""
        Path(self.core.config.forms_path).mkdir(parents=True, exist_ok=True)

    def renderer(self, kind: EntryKind) -> PillowFormRenderer:
        if kind not in self._renderers:
            config = self.core.config
            templates = {EntryKind.CADET: config.cadet_form_template, EntryKind.POOMSAE: config.poomsae_form_template}
            self._renderers[kind] = PillowFormRenderer(config.forms_path, ENTRY_KINDS[kind].title, templates[kind])
        return self._renderers[kind]
