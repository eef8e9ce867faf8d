from fastapi import (
    FastAPI,
    Request,
    APIRouter,
    Depends,
    Header,
    Response,
)
from fastapi.responses import JSONResponse

import logging

from mealplan.infra.paths import DATA_DIR
from mealplan.infra.pdf_utils import generate_pdf_for_shopping_list, generate_pdf_for_week
from mealplan.logic.planning.service import MealPlanService
from mealplan.logic.reporting.nutrition import compute_week_nutrition
from mealplan.logic.shopping.pricing import RateTable
from mealplan.utilities.constants import COST_ESTIMATE_NOTE
from mealplan.utilities.errors import CatalogError, NotFoundError
from mealplan.utilities.validators import (
    MealPlanCreateInput,
    MealPreferenceInput,
    ReplaceMealInput,
    ShoppingListInput,
)
from dotenv import load_dotenv
load_dotenv()

# Logging
logger = logging.getLogger("mealplan_app")

# Initialize FastAPI app
app = FastAPI(title="Meal Plan & Shopping List API")
router = APIRouter(prefix="/api/meal-plans")


def get_service() -> MealPlanService:
    """Service wired to the configured data directory (overridden in tests)."""
    return MealPlanService.from_data_dir(DATA_DIR, RateTable.from_config())


@app.exception_handler(NotFoundError)
async def _not_found_handler(request: Request, exc: NotFoundError):
    logger.info("Not found on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=404, content={"success": False, "error": str(exc)})


@app.exception_handler(CatalogError)
async def _catalog_error_handler(request: Request, exc: CatalogError):
    logger.error("Template catalog unreadable on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"success": False, "error": "Meal template catalog is unavailable"})


@app.exception_handler(ValueError)
async def _value_error_handler(request: Request, exc: ValueError):
    logger.warning("Rejected request on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})


# -------------------- API: Meal plans --------------------
@router.post("/create")
def create_meal_plan(payload: MealPlanCreateInput,
                     x_user_id: str = Header(...),
                     service: MealPlanService = Depends(get_service)):
    logger.info("Create meal plan request for user %s", x_user_id)
    plan = service.create_user_meal_plan(x_user_id, payload.to_config())
    return {"success": True, "data": plan.to_dict()}


@router.get("/current")
def current_meal_plan(x_user_id: str = Header(...),
                      service: MealPlanService = Depends(get_service)):
    return {"success": True, "data": service.get_user_meal_plan(x_user_id)}


@router.post("/preferences")
def save_meal_preference(payload: MealPreferenceInput,
                         x_user_id: str = Header(...),
                         service: MealPlanService = Depends(get_service)):
    logger.info("Save meal preference request for user %s", x_user_id)
    pref = service.save_meal_preference(
        x_user_id, payload.template_id, payload.preference_type, payload.rating, payload.notes
    )
    return {"success": True, "data": pref.to_dict()}


@router.get("/{plan_id}")
def get_meal_plan(plan_id: str,
                  x_user_id: str = Header(...),
                  service: MealPlanService = Depends(get_service)):
    return {"success": True, "data": service.get_user_meal_plan(x_user_id, plan_id)}


@router.put("/{plan_id}/replace")
def replace_meal(plan_id: str, payload: ReplaceMealInput,
                 x_user_id: str = Header(...),
                 service: MealPlanService = Depends(get_service)):
    entry = service.replace_meal_in_plan(
        x_user_id, plan_id, payload.day_of_week, payload.meal_timing,
        payload.meal_order, payload.new_template_id
    )
    return {"success": True, "message": "Meal replaced successfully", "data": entry.to_dict()}


@router.post("/{plan_id}/shopping-list")
def generate_shopping_list(plan_id: str, payload: ShoppingListInput,
                           x_user_id: str = Header(...),
                           service: MealPlanService = Depends(get_service)):
    record = service.generate_shopping_list(x_user_id, plan_id, payload.week_start_date)
    return {"success": True, "data": {**record.to_dict(), "cost_note": COST_ESTIMATE_NOTE}}


@router.get("/{plan_id}/nutrition")
def plan_nutrition(plan_id: str,
                   x_user_id: str = Header(...),
                   service: MealPlanService = Depends(get_service)):
    weekly = service.get_user_meal_plan(x_user_id, plan_id)
    return {"success": True, "data": compute_week_nutrition(weekly)}


@router.get("/{plan_id}/export_pdf")
def export_pdf(plan_id: str,
               x_user_id: str = Header(...),
               service: MealPlanService = Depends(get_service)):
    plan = service.plans.get_plan(plan_id, x_user_id)
    weekly = service.get_user_meal_plan(x_user_id, plan_id)
    pdf_bytes = generate_pdf_for_week(weekly, title=f"Meal Plan - {plan.name}")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=meal_plan_{plan_id}.pdf"},
    )


@router.get("/{plan_id}/shopping-list/export_pdf")
def export_shopping_list_pdf(plan_id: str,
                             x_user_id: str = Header(...),
                             service: MealPlanService = Depends(get_service)):
    record = service.get_latest_shopping_list(x_user_id, plan_id)
    pdf_bytes = generate_pdf_for_shopping_list(record)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=shopping_list_{plan_id}.pdf"},
    )


app.include_router(router)
