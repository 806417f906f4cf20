"""Admin endpoints: user moderation and the breeder application queue."""

from uuid import UUID

from fastapi import APIRouter, Query, Request

from pawmarket.api.admin.schemas import (
    AdminUserModel,
    AdminUserPageResponse,
    AdminUserResponse,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationStatsModel,
    ApplicationStatsResponse,
    ApprovedProfileResponse,
    RejectApplicationRequest,
    RequestInfoRequest,
    UserStatusRequest,
)
from pawmarket.api.breeders.schemas import BreederApplicationModel, BreederProfileModel
from pawmarket.api.core.decorators.admin import admin
from pawmarket.api.core.dependencies import (
    BreederWorkflowServiceDep,
    CurrentUserDep,
    UserManagementServiceDep,
)
from pawmarket.api.core.messages import APIResponse, MessageCode, Paginated
from pawmarket.database.models import UserStatus

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=AdminUserPageResponse)
@admin()
async def list_users(
    request: Request,
    user_service: UserManagementServiceDep,
    search: str | None = None,
    type: str | None = Query(None, pattern="^(adopter|seller|breeder)$"),
    status: UserStatus | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> AdminUserPageResponse:
    users, total = await user_service.list_users(
        search=search, user_type=type, status=status, page=page, limit=limit
    )
    return APIResponse.success(
        data=Paginated.build(
            [AdminUserModel.model_validate(user) for user in users], total, page, limit
        )
    )


@router.post("/users/{user_id}/status", response_model=AdminUserResponse)
@admin()
async def set_user_status(
    request: Request,
    user_id: UUID,
    body: UserStatusRequest,
    current_user: CurrentUserDep,
    user_service: UserManagementServiceDep,
) -> AdminUserResponse:
    user = await user_service.set_status(
        admin_id=current_user.id, user_id=user_id, status=body.status, reason=body.reason
    )
    return APIResponse.success(
        message_code=MessageCode.USER_STATUS_UPDATED,
        data=AdminUserModel.model_validate(user),
    )


@router.get("/breeders/stats", response_model=ApplicationStatsResponse)
@admin()
async def application_stats(
    request: Request,
    workflow: BreederWorkflowServiceDep,
) -> ApplicationStatsResponse:
    stats = await workflow.application_stats()
    return APIResponse.success(
        data=ApplicationStatsModel(**stats, total=sum(stats.values()))
    )


@router.get("/breeders/applications/pending", response_model=ApplicationListResponse)
@admin()
async def list_pending_applications(
    request: Request,
    workflow: BreederWorkflowServiceDep,
) -> ApplicationListResponse:
    applications = await workflow.list_pending_applications()
    return APIResponse.success(
        data=[BreederApplicationModel.model_validate(a) for a in applications]
    )


@router.post(
    "/breeders/applications/{application_id}/approve",
    response_model=ApprovedProfileResponse,
)
@admin()
async def approve_application(
    request: Request,
    application_id: UUID,
    current_user: CurrentUserDep,
    workflow: BreederWorkflowServiceDep,
) -> ApprovedProfileResponse:
    profile = await workflow.approve_application(application_id, current_user.id)
    return APIResponse.success(
        message_code=MessageCode.APPLICATION_APPROVED,
        data=BreederProfileModel.model_validate(profile),
    )


@router.post(
    "/breeders/applications/{application_id}/reject",
    response_model=ApplicationResponse,
)
@admin()
async def reject_application(
    request: Request,
    application_id: UUID,
    body: RejectApplicationRequest,
    current_user: CurrentUserDep,
    workflow: BreederWorkflowServiceDep,
) -> ApplicationResponse:
    application = await workflow.reject_application(
        application_id, current_user.id, body.reason
    )
    return APIResponse.success(
        message_code=MessageCode.APPLICATION_REJECTED,
        data=BreederApplicationModel.model_validate(application),
    )


@router.post(
    "/breeders/applications/{application_id}/request-info",
    response_model=ApplicationResponse,
)
@admin()
async def request_application_info(
    request: Request,
    application_id: UUID,
    body: RequestInfoRequest,
    current_user: CurrentUserDep,
    workflow: BreederWorkflowServiceDep,
) -> ApplicationResponse:
    application = await workflow.request_info(application_id, current_user.id, body.note)
    return APIResponse.success(
        message_code=MessageCode.APPLICATION_INFO_REQUESTED,
        data=BreederApplicationModel.model_validate(application),
    )
