from flask import request
from models.food_truck import FoodTruckSchedule
from app.utils import ok, error, internal_error_response, transactional, validate_schema
from app.schemas.catalog import ScheduleRequest
from app.services import catalog_service
from app.services.catalog_service import CatalogError
from . import manager_bp


@manager_bp.route("/schedule", methods=["GET"])
def get_schedule():
    rows = (
        FoodTruckSchedule.query.filter_by(food_truck_id=request.user.food_truck_id)
        .order_by(FoodTruckSchedule.day.asc())
        .all()
    )
    return ok([r.as_dict() for r in rows])


@manager_bp.route("/schedule", methods=["PUT"])
@validate_schema(ScheduleRequest)
def save_schedule():
    """Create or overwrite weekly schedule entries, one per day.
    ---
    tags: [Manager]
    responses:
      200: {description: Saved schedule}
      400: {description: Day out of range or opening time not before closing time}
    """
    data: ScheduleRequest = request.validated_data
    try:
        with transactional("Failed to save schedule"):
            rows = catalog_service.save_schedule(
                request.user.food_truck_id,
                [entry.model_dump() for entry in data.schedule],
            )
            result = [r.as_dict() for r in rows]
        return ok(result, message="Schedule saved")
    except CatalogError as e:
        return error(str(e), status=e.status)
    except Exception:
        return internal_error_response()
