"""
Submission Models

One table per form type. Every table shares the submission columns from
``SubmissionMixin`` (generated id, immutable reference, status, timestamps,
user agent and the back-office columns); the remaining columns hold the
validated payload.
"""

import enum
import uuid
from datetime import UTC, date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from nursery_api.core.database import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class FormType(str, enum.Enum):
    """Form types accepted by the intake pipeline."""

    REGISTRATION = "registration"
    MEDICAL = "medical"
    CONSENT = "consent"
    FUNDING = "funding"
    CHANGE = "change"
    ABOUT_ME = "aboutme"
    JOB_APPLICATION = "job_application"
    CONTACT = "contact"
    AVAILABILITY = "availability"
    VISIT_BOOKING = "visit_booking"
    WAITLIST = "waitlist"


class SubmissionMixin:
    """Columns common to every submission table."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    reference: Mapped[str] = mapped_column(String(40), unique=True, index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(32), index=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    user_agent: Mapped[str] = mapped_column(String(500), default="unknown", nullable=False)

    # Back-office columns, written by staff tooling only
    priority: Mapped[str] = mapped_column(String(16), default="normal", nullable=False)
    source: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class ChildRegistration(SubmissionMixin, Base):
    """Application & registration form for a new child."""

    __tablename__ = "registration_applications"

    # Child
    child_full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    child_dob: Mapped[date] = mapped_column(Date, nullable=False)
    child_nhs: Mapped[str | None] = mapped_column(String(50), nullable=True)
    child_gender: Mapped[str | None] = mapped_column(String(50), nullable=True)
    home_address: Mapped[str] = mapped_column(String(500), nullable=False)
    postcode: Mapped[str] = mapped_column(String(20), nullable=False)
    ethnicity: Mapped[str | None] = mapped_column(String(100), nullable=True)
    religion: Mapped[str | None] = mapped_column(String(100), nullable=True)
    first_languages: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    festivals: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Parents / carers
    parent1_name: Mapped[str] = mapped_column(String(200), nullable=False)
    parent1_relationship: Mapped[str] = mapped_column(String(50), nullable=False)
    parent1_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    parent1_phone: Mapped[str] = mapped_column(String(30), nullable=False)
    parent1_parental_responsibility: Mapped[str] = mapped_column(String(3), nullable=False)
    parent2_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    parent2_relationship: Mapped[str | None] = mapped_column(String(50), nullable=True)
    parent2_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    parent2_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    parent2_parental_responsibility: Mapped[str | None] = mapped_column(String(3), nullable=True)

    # Emergency contacts and collection
    emergency_contact1: Mapped[str] = mapped_column(String(500), nullable=False)
    emergency_contact2: Mapped[str] = mapped_column(String(500), nullable=False)
    not_authorised: Mapped[str | None] = mapped_column(Text, nullable=True)
    collection_password: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Health
    gp_name: Mapped[str] = mapped_column(String(200), nullable=False)
    gp_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    immunisations: Mapped[str] = mapped_column(String(200), nullable=False)
    allergies: Mapped[str | None] = mapped_column(Text, nullable=True)
    medication: Mapped[str | None] = mapped_column(Text, nullable=True)
    dietary_needs: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    send_support: Mapped[str | None] = mapped_column(String(3), nullable=True)
    send_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Attendance
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    days_attending: Mapped[list] = mapped_column(JSON, nullable=False)
    session_type: Mapped[str] = mapped_column(String(20), nullable=False)
    funded_hours: Mapped[str] = mapped_column(String(50), nullable=False)

    # Consents and declaration
    emergency_treatment: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    photo_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    outings_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sun_cream_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    declaration_confirm: Mapped[bool] = mapped_column(Boolean, nullable=False)
    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    signed_date: Mapped[date] = mapped_column(Date, nullable=False)


class MedicalForm(SubmissionMixin, Base):
    """Medical information and medication consent."""

    __tablename__ = "medical_forms"

    child_full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    child_dob: Mapped[date] = mapped_column(Date, nullable=False)
    home_address: Mapped[str] = mapped_column(String(500), nullable=False)
    postcode: Mapped[str] = mapped_column(String(20), nullable=False)
    gp_name: Mapped[str] = mapped_column(String(200), nullable=False)
    gp_address: Mapped[str] = mapped_column(String(500), nullable=False)
    health_visitor: Mapped[str | None] = mapped_column(String(200), nullable=True)

    has_medical_conditions: Mapped[str] = mapped_column(String(3), nullable=False)
    medical_conditions_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_allergies: Mapped[str] = mapped_column(String(3), nullable=False)
    allergies_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    on_long_term_medication: Mapped[str] = mapped_column(String(3), nullable=False)
    long_term_medication_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    medication_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    medication_dosage: Mapped[str | None] = mapped_column(String(200), nullable=True)
    medication_frequency: Mapped[str | None] = mapped_column(String(200), nullable=True)
    medication_storage: Mapped[str | None] = mapped_column(String(200), nullable=True)
    medication_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    medication_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    medication_admin_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    medication_container_consent: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    emergency_first_aid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    emergency_services_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    emergency_contact_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    hospital_accompany_consent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    signed_date: Mapped[date] = mapped_column(Date, nullable=False)


class ConsentForm(SubmissionMixin, Base):
    """Parental consents for routine nursery activities."""

    __tablename__ = "consent_forms"

    child_full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    child_dob: Mapped[date] = mapped_column(Date, nullable=False)

    local_walks: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    photo_displays: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    photo_learning_journal: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    group_photos: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    emergency_medical: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sun_cream: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    face_painting: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    toothbrushing: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    student_observations: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    pets_animals: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    first_aid_plasters: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    additional_comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    signed_date: Mapped[date] = mapped_column(Date, nullable=False)


class FundingDeclaration(SubmissionMixin, Base):
    """Declaration for government-funded childcare hours."""

    __tablename__ = "funding_declarations"

    child_full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    child_dob: Mapped[date] = mapped_column(Date, nullable=False)
    home_address: Mapped[str] = mapped_column(String(500), nullable=False)
    postcode: Mapped[str] = mapped_column(String(20), nullable=False)
    parent_full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    national_insurance_number: Mapped[str] = mapped_column(String(20), nullable=False)
    employment_status: Mapped[str] = mapped_column(String(100), nullable=False)
    thirty_hour_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    funding_types: Mapped[list] = mapped_column(JSON, nullable=False)

    confirm_accuracy: Mapped[bool] = mapped_column(Boolean, nullable=False)
    confirm_notify_changes: Mapped[bool] = mapped_column(Boolean, nullable=False)
    confirm_check_eligibility: Mapped[bool] = mapped_column(Boolean, nullable=False)
    confirm_additional_charges: Mapped[bool] = mapped_column(Boolean, nullable=False)
    signed_date: Mapped[date] = mapped_column(Date, nullable=False)


class ChangeOfDetails(SubmissionMixin, Base):
    """Notification that a family's details have changed."""

    __tablename__ = "change_requests"

    child_full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    child_dob: Mapped[date] = mapped_column(Date, nullable=False)
    change_types: Mapped[list] = mapped_column(JSON, nullable=False)
    new_information: Mapped[str] = mapped_column(Text, nullable=False)
    effective_from: Mapped[date] = mapped_column(Date, nullable=False)
    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    signed_date: Mapped[date] = mapped_column(Date, nullable=False)


class AboutMeForm(SubmissionMixin, Base):
    """The "All About Me" profile of the child's routines and preferences."""

    __tablename__ = "about_me_forms"

    child_full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    child_dob: Mapped[date] = mapped_column(Date, nullable=False)
    preferred_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    languages_spoken: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    siblings: Mapped[str | None] = mapped_column(Text, nullable=True)
    personality: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    emotional_expression: Mapped[str | None] = mapped_column(Text, nullable=True)
    fears_or_dislikes: Mapped[str | None] = mapped_column(Text, nullable=True)

    feeds_themselves: Mapped[str | None] = mapped_column(String(100), nullable=True)
    preferred_foods: Mapped[str | None] = mapped_column(Text, nullable=True)
    foods_to_avoid: Mapped[str | None] = mapped_column(Text, nullable=True)
    uses_cutlery: Mapped[str | None] = mapped_column(String(100), nullable=True)
    allergies_or_intolerances: Mapped[str | None] = mapped_column(Text, nullable=True)

    takes_naps: Mapped[str | None] = mapped_column(String(100), nullable=True)
    nap_time: Mapped[str | None] = mapped_column(String(100), nullable=True)
    comfort_item: Mapped[str | None] = mapped_column(String(200), nullable=True)
    sleep_routine: Mapped[str | None] = mapped_column(Text, nullable=True)

    toilet_trained: Mapped[str | None] = mapped_column(String(100), nullable=True)
    toilet_use: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    toileting_routines: Mapped[str | None] = mapped_column(Text, nullable=True)

    favourite_toys: Mapped[str | None] = mapped_column(Text, nullable=True)
    favourite_songs: Mapped[str | None] = mapped_column(Text, nullable=True)
    dislikes: Mapped[str | None] = mapped_column(Text, nullable=True)
    what_makes_happy: Mapped[str | None] = mapped_column(Text, nullable=True)
    cultural_needs: Mapped[str | None] = mapped_column(Text, nullable=True)
    festivals_and_events: Mapped[str | None] = mapped_column(Text, nullable=True)
    parental_hopes: Mapped[str | None] = mapped_column(Text, nullable=True)
    concerns: Mapped[str | None] = mapped_column(Text, nullable=True)

    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    signed_date: Mapped[date] = mapped_column(Date, nullable=False)


class JobApplication(SubmissionMixin, Base):
    """Application for an advertised staff position."""

    __tablename__ = "job_applications"

    position_applying_for: Mapped[str] = mapped_column(String(200), nullable=False)

    # Personal information
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    national_insurance_number: Mapped[str] = mapped_column(String(20), nullable=False)
    email_address: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    full_home_address: Mapped[str] = mapped_column(String(500), nullable=False)

    # Work authorisation and background
    right_to_work_uk: Mapped[str] = mapped_column(String(3), nullable=False)
    current_dbs_certificate: Mapped[str] = mapped_column(String(3), nullable=False)
    dbs_certificate_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    criminal_convictions: Mapped[str] = mapped_column(String(3), nullable=False)
    criminal_convictions_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Qualifications and experience
    qualifications: Mapped[str] = mapped_column(Text, nullable=False)
    relevant_training: Mapped[str | None] = mapped_column(Text, nullable=True)
    employment_history: Mapped[str] = mapped_column(Text, nullable=False)
    employment_gaps: Mapped[str | None] = mapped_column(Text, nullable=True)
    references: Mapped[str] = mapped_column(Text, nullable=False)
    why_work_here: Mapped[str] = mapped_column(Text, nullable=False)

    declaration: Mapped[bool] = mapped_column(Boolean, nullable=False)
    application_date: Mapped[date] = mapped_column(Date, nullable=False)

    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    interview_scheduled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index("ix_job_applications_email_position", "email_address", "position_applying_for"),
    )


class ContactInquiry(SubmissionMixin, Base):
    """General enquiry from the website contact form."""

    __tablename__ = "contact_inquiries"

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    phone_normalized: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class AvailabilityRequest(SubmissionMixin, Base):
    """Request to be told about place availability."""

    __tablename__ = "availability_requests"

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    phone_normalized: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    children_details: Mapped[str] = mapped_column(Text, default="", nullable=False)


class VisitBooking(SubmissionMixin, Base):
    """Family visit to look round the nursery, booked into a weekday time slot."""

    __tablename__ = "visit_bookings"

    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    child_name: Mapped[str] = mapped_column(String(200), nullable=False)
    child_age: Mapped[int] = mapped_column(Integer, nullable=False)
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    visit_time: Mapped[str] = mapped_column(String(10), nullable=False)
    message: Mapped[str] = mapped_column(Text, default="", nullable=False)
    reminder_sent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # One family per slot
    __table_args__ = (UniqueConstraint("visit_date", "visit_time", name="uq_visit_bookings_slot"),)
