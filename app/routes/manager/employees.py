from flask import request
from models.user import User, Role
from app.utils import ok, error, internal_error_response, transactional, validate_schema
from app.schemas.catalog import EmployeeRequest
from app.services.account_service import AccountError, create_user
from . import manager_bp


@manager_bp.route("/employees", methods=["GET"])
def list_employees():
    staff = (
        User.query.filter_by(food_truck_id=request.user.food_truck_id, role=Role.STAFF.value)
        .order_by(User.first_name.asc())
        .all()
    )
    return ok([u.to_dict() for u in staff])


@manager_bp.route("/employees", methods=["POST"])
@validate_schema(EmployeeRequest)
def add_employee():
    data: EmployeeRequest = request.validated_data
    try:
        with transactional("Failed to add employee"):
            user = create_user(data.model_dump(), role=Role.STAFF, food_truck_id=request.user.food_truck_id)
            result = user.to_dict()
        return ok(result, message="Employee added", status=201)
    except AccountError as e:
        return error(str(e), status=409)
    except Exception:
        return internal_error_response()
