from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from .service import ReportsService

reports_router = APIRouter()
can_read_reports = require_permission(Resource.REPORTS, Action.READ)


@reports_router.get("/sales")
async def sales_report(
    identity: Identity = Depends(can_read_reports),
    period: Literal["daily", "monthly"] = Query("daily"),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ReportsService(db).sales(period, start_date, end_date)


@reports_router.get("/inventory")
async def inventory_report(
    identity: Identity = Depends(can_read_reports),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ReportsService(db).inventory()


@reports_router.get("/top-products")
async def top_products_report(
    identity: Identity = Depends(can_read_reports),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ReportsService(db).top_products(limit)


@reports_router.get("/employee-performance")
async def employee_performance_report(
    identity: Identity = Depends(can_read_reports),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ReportsService(db).employee_performance()
