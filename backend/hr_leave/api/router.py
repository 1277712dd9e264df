from fastapi import APIRouter

from hr_leave.api.employees import employees_router
from hr_leave.api.leave import leave_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(leave_router)
