from uuid import uuid4

import pytest
from sqlalchemy import func, select

from pawmarket.api.core.exceptions.base import (
    DuplicateApplicationError,
    InputValidationError,
    InvalidStateError,
)
from pawmarket.api.core.messages import MessageCode
from pawmarket.database.models import (
    ApplicationStatus,
    BreederApplication,
    BreederApplicationEvent,
    BreederProfile,
)
from pawmarket.modules.breeder.workflow import BreederWorkflowService
from tests.factories import (
    BreederApplicationFactory,
    BreederProfileFactory,
    UserFactory,
)


def application_data(city_id, breed_ids=None, **overrides) -> dict:
    data = {
        "business_name": "Happy Paws Kennel",
        "kennel_name": "Happy Paws",
        "years_experience": 6,
        "description": "Family run kennel",
        "business_phone": "9876543210",
        "business_email": "hello@happypaws.in",
        "website_url": None,
        "city_id": city_id,
        "address": "12 MG Road",
        "pincode": "560001",
        "breed_ids": breed_ids or [],
        "document_urls": {},
        "agree_to_ethical_standards": True,
    }
    data.update(overrides)
    return data


async def count_events(db_session, application_id) -> int:
    return await db_session.scalar(
        select(func.count(BreederApplicationEvent.id)).where(
            BreederApplicationEvent.application_id == application_id
        )
    )


@pytest.mark.asyncio
async def test_approve_creates_single_profile_and_grants_role(
    db_session, test_user, test_admin_user, test_city, test_breed
):
    application = await BreederApplicationFactory.create_async(
        db_session,
        user_id=test_user.id,
        city=test_city,
        business_name="Happy Paws Kennel",
        breed_ids=[str(test_breed.id)],
    )
    workflow = BreederWorkflowService(db_session)

    profile = await workflow.approve_application(application.id, test_admin_user.id)

    assert profile.slug == "happy-paws-kennel"
    assert profile.user_id == test_user.id
    assert profile.is_verified is False
    assert [breed.id for breed in profile.breeds] == [test_breed.id]

    await db_session.refresh(test_user)
    assert test_user.is_breeder is True

    application = await workflow.get_application(application.id)
    assert application.status == ApplicationStatus.APPROVED
    assert application.reviewed_by_id == test_admin_user.id
    assert application.reviewed_at is not None

    # Approving twice is rejected and leaves exactly one profile
    with pytest.raises(InvalidStateError):
        await workflow.approve_application(application.id, test_admin_user.id)

    profiles = await db_session.scalar(
        select(func.count(BreederProfile.id)).where(
            BreederProfile.user_id == test_user.id
        )
    )
    assert profiles == 1


@pytest.mark.asyncio
async def test_approve_suffixes_colliding_slug(
    db_session, test_user, test_admin_user, test_city
):
    other_user = await UserFactory.create_async(db_session)
    await BreederProfileFactory.create_async(
        db_session, user_id=other_user.id, city=test_city, slug="happy-paws-kennel"
    )
    application = await BreederApplicationFactory.create_async(
        db_session,
        user_id=test_user.id,
        city=test_city,
        business_name="Happy Paws Kennel!",
    )

    profile = await BreederWorkflowService(db_session).approve_application(
        application.id, test_admin_user.id
    )

    assert profile.slug == "happy-paws-kennel-2"


@pytest.mark.asyncio
async def test_approve_with_unknown_breed_writes_nothing(
    db_session, test_user, test_admin_user, test_city
):
    application = await BreederApplicationFactory.create_async(
        db_session,
        user_id=test_user.id,
        city=test_city,
        breed_ids=[str(uuid4())],
    )
    workflow = BreederWorkflowService(db_session)

    with pytest.raises(InputValidationError) as exc_info:
        await workflow.approve_application(application.id, test_admin_user.id)
    assert exc_info.value.message_code == MessageCode.BREED_NOT_FOUND

    await db_session.refresh(test_user)
    assert test_user.is_breeder is False
    application = await workflow.get_application(application.id)
    assert application.status == ApplicationStatus.PENDING
    assert await db_session.scalar(select(func.count(BreederProfile.id))) == 0


@pytest.mark.asyncio
async def test_reject_keeps_user_role_and_records_reason(
    db_session, test_user, test_admin_user, test_city
):
    application = await BreederApplicationFactory.create_async(
        db_session, user_id=test_user.id, city=test_city
    )

    rejected = await BreederWorkflowService(db_session).reject_application(
        application.id, test_admin_user.id, "Documents unreadable"
    )

    assert rejected.status == ApplicationStatus.REJECTED
    assert rejected.review_notes == {"reason": "Documents unreadable"}
    await db_session.refresh(test_user)
    assert test_user.is_breeder is False
    assert await count_events(db_session, application.id) == 1


@pytest.mark.asyncio
async def test_only_pending_applications_can_be_reviewed(
    db_session, test_user, test_admin_user, test_city
):
    application = await BreederApplicationFactory.create_async(
        db_session,
        user_id=test_user.id,
        city=test_city,
        status=ApplicationStatus.REJECTED,
    )
    workflow = BreederWorkflowService(db_session)

    with pytest.raises(InvalidStateError):
        await workflow.reject_application(application.id, test_admin_user.id, "again")
    with pytest.raises(InvalidStateError):
        await workflow.request_info(application.id, test_admin_user.id, "more")


@pytest.mark.asyncio
async def test_submit_records_event_and_blocks_duplicates(db_session, test_user, test_city):
    workflow = BreederWorkflowService(db_session)

    application = await workflow.submit_application(
        test_user.id, application_data(test_city.id)
    )

    assert application.status == ApplicationStatus.PENDING
    assert application.submitted_at is not None
    assert await count_events(db_session, application.id) == 1

    with pytest.raises(DuplicateApplicationError):
        await workflow.submit_application(test_user.id, application_data(test_city.id))


@pytest.mark.asyncio
async def test_resubmission_after_rejection_supersedes_old_row(
    db_session, test_user, test_admin_user, test_city
):
    workflow = BreederWorkflowService(db_session)
    first = await workflow.submit_application(test_user.id, application_data(test_city.id))
    await workflow.reject_application(first.id, test_admin_user.id, "Incomplete")

    second = await workflow.submit_application(
        test_user.id, application_data(test_city.id, business_name="Happy Paws Kennels")
    )

    assert second.id != first.id
    assert second.status == ApplicationStatus.PENDING
    first = await workflow.get_application(first.id)
    assert first.superseded_at is not None
    assert first.status == ApplicationStatus.REJECTED

    current = await workflow.get_my_application(test_user.id)
    assert current.id == second.id

    stats = await workflow.application_stats()
    assert stats["pending"] == 1
    assert stats["rejected"] == 0


@pytest.mark.asyncio
async def test_info_requested_application_returns_to_pending_in_place(
    db_session, test_user, test_admin_user, test_city
):
    workflow = BreederWorkflowService(db_session)
    application = await workflow.submit_application(
        test_user.id, application_data(test_city.id)
    )
    await workflow.request_info(application.id, test_admin_user.id, "Add KCI papers")

    resubmitted = await workflow.submit_application(
        test_user.id,
        application_data(test_city.id, document_urls={"kci": "https://cdn/kci.pdf"}),
    )

    assert resubmitted.id == application.id
    assert resubmitted.status == ApplicationStatus.PENDING
    assert resubmitted.document_urls == {"kci": "https://cdn/kci.pdf"}
    assert await count_events(db_session, application.id) == 3

    total = await db_session.scalar(
        select(func.count(BreederApplication.id)).where(
            BreederApplication.user_id == test_user.id
        )
    )
    assert total == 1


@pytest.mark.asyncio
async def test_pending_queue_is_oldest_first(db_session, test_city):
    first_user = await UserFactory.create_async(db_session)
    second_user = await UserFactory.create_async(db_session)
    workflow = BreederWorkflowService(db_session)

    first = await workflow.submit_application(first_user.id, application_data(test_city.id))
    second = await workflow.submit_application(
        second_user.id, application_data(test_city.id)
    )

    queue = await workflow.list_pending_applications()
    assert [a.id for a in queue] == [first.id, second.id]
