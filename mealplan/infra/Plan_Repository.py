import logging
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from mealplan.domain.MealTemplate import MealTemplate, MealTiming
from mealplan.domain.Plan import MealPlan, PlanConfig
from mealplan.domain.ScheduleEntry import ScheduleEntry
from mealplan.infra.json_store import STORE_LOCK, atomic_write, load_json
from mealplan.infra.paths import DATA_DIR, PLANS_FILE_NAME, SCHEDULES_FILE_NAME
from mealplan.infra.Template_Repository import TemplateRepository
from mealplan.utilities.constants import DATE_FORMAT
from mealplan.utilities.errors import NotFoundError

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, data_dir: Optional[Path] = None,
                 template_repository: Optional[TemplateRepository] = None):
        base = Path(data_dir or DATA_DIR)
        self.plans_path = base / PLANS_FILE_NAME
        self.schedules_path = base / SCHEDULES_FILE_NAME
        self.templates = template_repository or TemplateRepository(base)

    # --- Plans ------------------------------------------------------------
    def _load_plans(self) -> List[dict]:
        plans = load_json(self.plans_path, [])
        return plans if isinstance(plans, list) else []

    def create_plan(self, user_id: str, config: PlanConfig,
                    targets: Optional[Dict[str, int]] = None,
                    plan_id: Optional[str] = None) -> MealPlan:
        """Store a new active plan; earlier plans of the user are deactivated."""
        plan = MealPlan(
            plan_id=plan_id or uuid4().hex,
            user_id=user_id,
            config=config,
            targets=targets,
            is_active=True,
            start_date=date.today().strftime(DATE_FORMAT),
            created_at=datetime.now().isoformat(),
        )
        with STORE_LOCK:
            plans = self._load_plans()
            for p in plans:
                if p.get("user_id") == user_id and p.get("is_active"):
                    p["is_active"] = False
            plans.append(plan.to_dict())
            atomic_write(self.plans_path, plans)
        return plan

    def get_plan(self, plan_id: str, user_id: Optional[str] = None) -> MealPlan:
        """Plan by id; a plan owned by another user counts as missing."""
        for p in self._load_plans():
            if p.get("plan_id") == plan_id and (user_id is None or p.get("user_id") == user_id):
                return MealPlan.from_dict(p)
        raise NotFoundError("Meal plan", plan_id)

    def get_active_plan(self, user_id: str) -> MealPlan:
        for p in reversed(self._load_plans()):
            if p.get("user_id") == user_id and p.get("is_active"):
                return MealPlan.from_dict(p)
        raise NotFoundError("Active meal plan for user", user_id)

    # --- Schedules --------------------------------------------------------
    def _load_schedules(self) -> Dict[str, List[dict]]:
        schedules = load_json(self.schedules_path, {})
        return schedules if isinstance(schedules, dict) else {}

    def discard_plan(self, plan_id: str, reactivate_plan_id: Optional[str] = None) -> None:
        """Remove a plan with its schedule, optionally re-activating the plan it replaced."""
        with STORE_LOCK:
            plans = [p for p in self._load_plans() if p.get("plan_id") != plan_id]
            for p in plans:
                if reactivate_plan_id and p.get("plan_id") == reactivate_plan_id:
                    p["is_active"] = True
            atomic_write(self.plans_path, plans)
            schedules = self._load_schedules()
            if schedules.pop(plan_id, None) is not None:
                atomic_write(self.schedules_path, schedules)
        logger.info(f"Discarded plan {plan_id}")

    @staticmethod
    def check_schedule(plan_id: str, entries: Sequence[ScheduleEntry],
                       existing: Sequence[ScheduleEntry] = ()) -> None:
        """Raise ValueError if an entry belongs to another plan or repeats a slot key."""
        seen = {e.key for e in existing}
        for entry in entries:
            if entry.plan_id != plan_id:
                raise ValueError(f"Schedule entry belongs to plan {entry.plan_id}, not {plan_id}")
            if entry.key in seen:
                raise ValueError(f"Duplicate schedule slot for plan {plan_id}: {entry.key}")
            seen.add(entry.key)

    def create_schedule(self, plan_id: str, entries: Sequence[ScheduleEntry]) -> None:
        """Bulk insert; nothing is written if any entry would duplicate a slot key."""
        with STORE_LOCK:
            schedules = self._load_schedules()
            existing = [ScheduleEntry.from_dict(e) for e in schedules.get(plan_id, [])]
            self.check_schedule(plan_id, entries, existing)
            schedules[plan_id] = [e.to_dict() for e in existing] + [e.to_dict() for e in entries]
            atomic_write(self.schedules_path, schedules)

    def get_schedule_entries(self, plan_id: str) -> List[ScheduleEntry]:
        entries = [ScheduleEntry.from_dict(e) for e in self._load_schedules().get(plan_id, [])]
        return sorted(entries, key=lambda e: e.sort_key())

    def get_schedule_entries_for_plan(self, plan_id: str) -> List[Tuple[ScheduleEntry, MealTemplate]]:
        """Entries joined with their templates, ordered by (day, timing, order)."""
        templates = self.templates.get_templates()
        rows = []
        for entry in self.get_schedule_entries(plan_id):
            template = templates.get(entry.template_id)
            if template is None:
                logger.warning(f"Template {entry.template_id} referenced by plan {plan_id} no longer exists")
                continue
            rows.append((entry, template))
        return rows

    def replace_entry_template(self, plan_id: str, day_of_week: int, meal_timing,
                               meal_order: int, template_id: str) -> ScheduleEntry:
        """Point the slot identified by (day, timing, order) at another template."""
        key = (day_of_week, MealTiming.parse(meal_timing), meal_order)
        with STORE_LOCK:
            schedules = self._load_schedules()
            rows = schedules.get(plan_id, [])
            for i, raw in enumerate(rows):
                entry = ScheduleEntry.from_dict(raw)
                if entry.key == key:
                    entry.template_id = template_id
                    rows[i] = entry.to_dict()
                    atomic_write(self.schedules_path, schedules)
                    return entry
        raise NotFoundError("Schedule entry", f"{plan_id} day={day_of_week} {key[1].value} #{meal_order}")
