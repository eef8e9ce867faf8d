"""Meal template catalog repository (JSON file persistence)."""
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from mealplan.domain.MealTemplate import DietaryCategory, MealTemplate
from mealplan.infra.json_store import load_json
from mealplan.infra.paths import DATA_DIR, TEMPLATES_FILE_NAME
from mealplan.logic.catalog.filter import exclude_ingredients, filter_templates
from mealplan.utilities.errors import CatalogError, NotFoundError

logger = logging.getLogger(__name__)


class TemplateRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.path = Path(data_dir or DATA_DIR) / TEMPLATES_FILE_NAME

    def reading_from_templates(self) -> List[MealTemplate]:
        """All catalog templates, newest first; equal timestamps keep file order."""
        raw = load_json(self.path, [])
        if not isinstance(raw, list):
            logger.error(f"Template catalog {self.path} is not a list. Returning empty catalog.")
            return []
        templates = []
        for entry in raw:
            try:
                templates.append(MealTemplate.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Invalid template in {self.path}: {e!r}")
                raise CatalogError(f"Invalid template in {self.path}: {e}") from e
        # sorted() is stable, so ties stay in file order
        return sorted(templates, key=lambda t: t.created_at, reverse=True)

    def list_active_templates(self, categories: Iterable[DietaryCategory],
                              excluded: Optional[Iterable[str]] = None) -> List[MealTemplate]:
        """Active templates in the given categories without any excluded ingredient."""
        matching = filter_templates(self.reading_from_templates(), categories)
        return exclude_ingredients(matching, excluded or [])

    def get_templates(self) -> Dict[str, MealTemplate]:
        return {t.template_id: t for t in self.reading_from_templates()}

    def get_template(self, template_id: str) -> MealTemplate:
        template = self.get_templates().get(template_id)
        if template is None:
            raise NotFoundError("Meal template", template_id)
        return template
