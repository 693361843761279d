# app/services/landing_service.py
from datetime import datetime, timezone
from typing import Optional
from app.database.contact_repository import ContactRepository
from app.database.event_repository import EventRepository
from app.models.landing import (
    ContactRequest, SubscribeRequest, TrackClickRequest,
    ContactSource, ConversionEventType
)
from app.services.write_policy import WritePolicy, run_store_operation
from app.utils.request_metadata import RequestMetadata
from app.utils.validation import (
    require_fields, validate_subscription_email,
    placeholder_name, parse_client_timestamp
)
import logging

logger = logging.getLogger(__name__)

SUBSCRIPTION_EVENT_SOURCE = "final_cta_section"

class LandingService:
    """Lead capture, newsletter signups and click analytics for the landing page.

    Each call is a short sequence of store operations awaited one after the
    other. Which of them may fail the request is decided by its WritePolicy.
    """

    def __init__(self, contacts: ContactRepository, events: EventRepository):
        self.contacts = contacts
        self.events = events

    async def submit_contact(self, request: ContactRequest, metadata: RequestMetadata) -> Optional[str]:
        """Save a popup form submission and log its click and conversion.

        Returns the contact id, which is None when the upsert lost a
        concurrent-insert race.
        """
        require_fields(name=request.name, email=request.email, cta_type=request.cta_type)
        updated_at = parse_client_timestamp(request.timestamp)

        # Step 1: Upsert contact
        contact_id = await run_store_operation(
            WritePolicy.CRITICAL,
            "contact upsert",
            lambda: self.contacts.upsert_contact(
                email=request.email,
                name=request.name,
                source=ContactSource.MODAL.value,
                company=request.company,
                user_agent=metadata.user_agent,
                ip_address=metadata.ip_address,
                updated_at=updated_at
            ),
            ignore_unique_violation=True
        )

        # Step 2: Log the CTA click
        await run_store_operation(
            WritePolicy.BEST_EFFORT,
            "button click insert",
            lambda: self.events.insert_button_click(
                button_type=request.cta_type,
                contact_id=contact_id,
                page_url=metadata.referrer,
                session_id=metadata.session_id,
                user_agent=metadata.user_agent,
                ip_address=metadata.ip_address,
                referrer=metadata.referrer
            )
        )

        # Step 3: Log the conversion
        await run_store_operation(
            WritePolicy.BEST_EFFORT,
            "conversion event insert",
            lambda: self.events.insert_conversion_event(
                event_type=ConversionEventType.MODAL_FORM_SUBMIT.value,
                contact_id=contact_id,
                event_data={
                    "cta_type": request.cta_type,
                    "timestamp": request.timestamp or datetime.now(timezone.utc).isoformat()
                }
            )
        )

        logger.info(f"Contact captured: {contact_id} via {request.cta_type}")
        return contact_id

    async def subscribe(self, request: SubscribeRequest, metadata: RequestMetadata) -> None:
        """Subscribe an email to the newsletter"""
        email = validate_subscription_email(request.email)

        contact_id = await run_store_operation(
            WritePolicy.CRITICAL,
            "contact upsert",
            lambda: self.contacts.upsert_contact(
                email=email,
                name=placeholder_name(email),
                source=ContactSource.SUBSCRIPTION_FORM.value,
                user_agent=metadata.user_agent,
                ip_address=metadata.ip_address,
                include_company=False
            ),
            ignore_unique_violation=True
        )

        # Unique violations are not reclassified here; the subscription row
        # is what this endpoint exists for.
        await run_store_operation(
            WritePolicy.CRITICAL,
            "subscription upsert",
            lambda: self.contacts.upsert_subscription(email=email, contact_id=contact_id)
        )

        await run_store_operation(
            WritePolicy.BEST_EFFORT,
            "conversion event insert",
            lambda: self.events.insert_conversion_event(
                event_type=ConversionEventType.EMAIL_SUBSCRIPTION.value,
                contact_id=contact_id,
                event_data={"source": SUBSCRIPTION_EVENT_SOURCE}
            )
        )

        logger.info(f"Newsletter subscription saved (contact: {contact_id})")

    async def track_click(self, request: TrackClickRequest, metadata: RequestMetadata) -> None:
        """Record a button click, attributing it to a known contact if possible.

        Never creates a contact.
        """
        require_fields("Button type required", button_type=request.button_type)

        contact_id = None
        if request.email:
            contact_id = await run_store_operation(
                WritePolicy.BEST_EFFORT,
                "contact lookup",
                lambda: self.contacts.find_contact_id_by_email(request.email)
            )

        await run_store_operation(
            WritePolicy.CRITICAL,
            "button click insert",
            lambda: self.events.insert_button_click(
                button_type=request.button_type,
                contact_id=contact_id,
                page_url=metadata.referrer,
                session_id=metadata.session_id,
                user_agent=metadata.user_agent,
                ip_address=metadata.ip_address,
                referrer=metadata.referrer
            )
        )
