"""Contact form and newsletter subscription routes."""

from fastapi import APIRouter, BackgroundTasks
from fastapi.responses import PlainTextResponse

from src.schemas.intake import ContactCreate, SubscribeCreate
from src.services.contact_service import ContactService
from src.services.subscription_service import SubscriptionService

router = APIRouter(tags=["intake"])


@router.post(
    "/contact",
    response_class=PlainTextResponse,
    summary="Submit contact form",
    description="Stores a contact submission and emails the admin and the sender.",
)
async def submit_contact(data: ContactCreate) -> str:
    """Handle a contact form submission.

    Raises:
        InvalidInputError: 400 if a required field is blank.
        StoreError: 500 if the submission cannot be stored.
    """
    service = ContactService()
    await service.submit(data)
    return "Message sent successfully"


@router.post(
    "/subscribe",
    response_class=PlainTextResponse,
    summary="Subscribe to newsletter",
    description="Adds an email to the subscriber list. Notifications are sent after the response.",
)
async def subscribe(data: SubscribeCreate, background_tasks: BackgroundTasks) -> str:
    """Handle a newsletter subscription.

    Raises:
        InvalidInputError: 400 if email is blank.
        AlreadySubscribedError: 400 if the email is already subscribed.
        StoreError: 500 if the store lookup or insert fails.
    """
    service = SubscriptionService()
    record = await service.subscribe(data.email)
    background_tasks.add_task(service.send_notifications, record["email"])
    return "Subscribed successfully"
