"""
Form Definitions

One ``FormDefinition`` per form type: reference prefix, initial status,
backing table, duplicate rule, document and notification copy. The pipeline
is generic; everything form-specific lives here.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from nursery_api.core.config import settings
from nursery_api.modules.submissions import duplicates
from nursery_api.modules.submissions.documents import CONSENT_LABELS
from nursery_api.modules.submissions.duplicates import DuplicateGuard
from nursery_api.modules.submissions.models import (
    AboutMeForm,
    AvailabilityRequest,
    ChangeOfDetails,
    ChildRegistration,
    ConsentForm,
    ContactInquiry,
    FormType,
    FundingDeclaration,
    JobApplication,
    MedicalForm,
    VisitBooking,
)

FormText = Callable[[Any], str]
InfoRows = Callable[[Any], list[tuple[str, str]]]


def _no_info(_form: Any) -> list[tuple[str, str]]:
    return []


def _no_alert(_form: Any) -> str | None:
    return None


def _admin_address() -> str:
    return settings.admin_email


@dataclass(frozen=True)
class FormDefinition:
    form_type: FormType
    label: str
    prefix: str
    model: type
    status: str
    primary_name: FormText
    subject_name: FormText
    success_message: FormText
    admin_subject: Callable[[Any, str], str]
    submitter_subject: FormText | None = None
    email_field: str | None = None
    renders_document: bool = True
    duplicate_guard: DuplicateGuard | None = None
    conflict_message: str = "A matching submission already exists"
    conflict_errors: list[str] = field(default_factory=list)
    additional_info: InfoRows = _no_info
    alert: Callable[[Any], str | None] = _no_alert
    next_steps: list[str] = field(default_factory=list)
    custom_message: FormText | None = None
    reminder: str | None = None
    admin_recipient: Callable[[], str] = _admin_address
    invalid_message: str = "Validation failed"
    source: str = "website"

    @property
    def attachment_label(self) -> str:
        return self.label.replace(" ", "_")

    def submitter_address(self, form: Any) -> str | None:
        if self.email_field is None:
            return None
        return getattr(form, self.email_field, None) or None


def _child(form: Any) -> str:
    return form.child_full_name


def _parent(form: Any) -> str:
    return form.parent_name


def _child_admin_subject(title: str) -> Callable[[Any, str], str]:
    return lambda form, reference: f"{title} - {form.child_full_name} - {reference}"


def _child_submitter_subject(title: str) -> FormText:
    return lambda form: f"{title} Received - {form.child_full_name}"


def _submitted_for(title: str) -> FormText:
    return lambda form: f"{title} submitted successfully for {form.child_full_name}"


def _dob(form: Any) -> list[tuple[str, str]]:
    return [("Child", form.child_full_name), ("Date of birth", form.child_dob.strftime("%d/%m/%Y"))]


# ============================================
# Per-form alerts and info tables
# ============================================


def _registration_info(form: Any) -> list[tuple[str, str]]:
    return _dob(form) + [
        ("Parent / carer", form.parent1_name),
        ("Phone", form.parent1_phone),
        ("Preferred start date", form.start_date.strftime("%d/%m/%Y")),
        ("Session type", form.session_type),
    ]


def _medical_alert(form: Any) -> str | None:
    flagged = []
    if form.has_medical_conditions == "yes":
        flagged.append("medical conditions")
    if form.has_allergies == "yes":
        flagged.append("allergies")
    if form.on_long_term_medication == "yes":
        flagged.append("long-term medication")
    if not flagged:
        return None
    return f"Attention: this child has reported {', '.join(flagged)}"


def _consent_info(form: Any) -> list[tuple[str, str]]:
    withheld = [label for name, label in CONSENT_LABELS.items() if not getattr(form, name)]
    return _dob(form) + [("Consents withheld", ", ".join(withheld) or "None")]


def _funding_info(form: Any) -> list[tuple[str, str]]:
    return _dob(form) + [
        ("Parent / carer", form.parent_full_name),
        ("Funding types", ", ".join(form.funding_types)),
    ]


def _change_info(form: Any) -> list[tuple[str, str]]:
    return _dob(form) + [
        ("Change types", ", ".join(form.change_types)),
        ("Effective from", form.effective_from.strftime("%d/%m/%Y")),
    ]


def _job_info(form: Any) -> list[tuple[str, str]]:
    return [
        ("Position", form.position_applying_for),
        ("Email", form.email_address),
        ("Phone", form.phone_number),
        ("Right to work in the UK", form.right_to_work_uk.capitalize()),
        ("Current DBS certificate", form.current_dbs_certificate.capitalize()),
    ]


def _contact_info(form: Any) -> list[tuple[str, str]]:
    return [("Phone", form.phone_number), ("Message", form.message)]


def _availability_info(form: Any) -> list[tuple[str, str]]:
    return [("Phone", form.phone_number), ("Children", form.children_details or "Not provided")]


def _years_old(age: int) -> str:
    return f"{age} year{'' if age == 1 else 's'} old"


def _visit_info(form: Any) -> list[tuple[str, str]]:
    rows = [
        ("Visit date", form.visit_date.strftime("%A %d %B %Y")),
        ("Time", form.visit_time),
        ("Child", f"{form.child_name} ({_years_old(form.child_age)})"),
        ("Email", form.email),
        ("Phone", form.phone),
    ]
    if form.message:
        rows.append(("Message", form.message))
    return rows


def _hr_address() -> str:
    return settings.hr_recipient


# ============================================
# Registry
# ============================================


REGISTRATION = FormDefinition(
    form_type=FormType.REGISTRATION,
    label="Application Form",
    prefix="APP",
    model=ChildRegistration,
    status="submitted",
    primary_name=lambda form: form.parent1_name,
    subject_name=_child,
    success_message=_submitted_for("Application"),
    admin_subject=lambda form, reference: f"New Application - {form.child_full_name} - {reference}",
    submitter_subject=lambda form: f"Application Received - {form.child_full_name}",
    email_field="parent1_email",
    additional_info=_registration_info,
    next_steps=[
        "Our admissions team will review your application",
        "We will contact you to confirm availability and a start date",
        "You will be invited to settling-in sessions before your child starts",
    ],
)

MEDICAL = FormDefinition(
    form_type=FormType.MEDICAL,
    label="Medical Form",
    prefix="MED",
    model=MedicalForm,
    status="active",
    primary_name=_parent,
    subject_name=_child,
    success_message=_submitted_for("Medical form"),
    admin_subject=_child_admin_subject("New Medical Form"),
    submitter_subject=_child_submitter_subject("Medical Form"),
    email_field="parent_email",
    additional_info=_dob,
    alert=_medical_alert,
    next_steps=[
        "The medical information has been added to your child's record",
        "Key staff will be briefed on any conditions, allergies or medication",
    ],
    reminder="Please let us know straight away if your child's medical needs change.",
)

CONSENT = FormDefinition(
    form_type=FormType.CONSENT,
    label="Consent Form",
    prefix="CONSENT",
    model=ConsentForm,
    status="active",
    primary_name=_parent,
    subject_name=_child,
    success_message=_submitted_for("Consent form"),
    admin_subject=_child_admin_subject("New Consent Form"),
    submitter_subject=_child_submitter_subject("Consent Form"),
    email_field="parent_email",
    additional_info=_consent_info,
    next_steps=["Your consent preferences are now on file and will be followed by all staff"],
    reminder="You can change your consent choices at any time by submitting a new form.",
)

FUNDING = FormDefinition(
    form_type=FormType.FUNDING,
    label="Funding Declaration",
    prefix="FUND",
    model=FundingDeclaration,
    status="pending_verification",
    primary_name=lambda form: form.parent_full_name,
    subject_name=_child,
    success_message=_submitted_for("Funding declaration"),
    admin_subject=_child_admin_subject("New Funding Declaration"),
    submitter_subject=_child_submitter_subject("Funding Declaration"),
    email_field="parent_email",
    additional_info=_funding_info,
    alert=lambda _form: "Eligibility codes need verifying with the local authority",
    next_steps=[
        "We will verify your eligibility with the local authority",
        "Funded hours will be applied once eligibility is confirmed",
    ],
    reminder="Remember to reconfirm your 30-hour code every three months.",
)

CHANGE = FormDefinition(
    form_type=FormType.CHANGE,
    label="Change of Details",
    prefix="CHANGE",
    model=ChangeOfDetails,
    status="pending",
    primary_name=_parent,
    subject_name=_child,
    success_message=_submitted_for("Change of details"),
    admin_subject=_child_admin_subject("Change of Details"),
    submitter_subject=_child_submitter_subject("Change of Details"),
    email_field="parent_email",
    additional_info=_change_info,
    alert=lambda _form: "Action required: please update child records",
    next_steps=["We will update your child's records from the effective date you gave"],
)

ABOUT_ME = FormDefinition(
    form_type=FormType.ABOUT_ME,
    label="All About Me Form",
    prefix="ABOUTME",
    model=AboutMeForm,
    status="completed",
    primary_name=_parent,
    subject_name=_child,
    success_message=_submitted_for("All About Me form"),
    admin_subject=_child_admin_subject("New All About Me Form"),
    submitter_subject=_child_submitter_subject("All About Me Form"),
    email_field="parent_email",
    additional_info=_dob,
    next_steps=[
        "Your child's key person will read the profile before their first session",
        "We will use it to plan settling-in around your child's routines",
    ],
)

JOB_NEXT_STEPS = [
    "Your application will be reviewed within 5-7 business days",
    "You will receive an email confirmation shortly",
    "Suitable candidates will be contacted for an interview",
    "Please have your original certificates ready for verification",
]

JOB_APPLICATION = FormDefinition(
    form_type=FormType.JOB_APPLICATION,
    label="Job Application",
    prefix="JOB",
    model=JobApplication,
    status="submitted",
    primary_name=lambda form: form.full_name,
    subject_name=lambda form: form.position_applying_for,
    success_message=lambda form: (
        f"Thank you {form.full_name}! Your application for {form.position_applying_for} "
        "has been successfully submitted. We will review your application and contact "
        "you within 5-7 business days."
    ),
    admin_subject=lambda form, reference: (
        f"New Job Application - {form.position_applying_for} - {reference}"
    ),
    submitter_subject=lambda form: f"Application Received - {form.position_applying_for} Position",
    email_field="email_address",
    duplicate_guard=duplicates.recent_application_for_position(),
    invalid_message="Application validation failed. Please check the highlighted fields.",
    source="website_application",
    additional_info=_job_info,
    alert=lambda _form: "New application: review within 5-7 business days as communicated to candidate",
    next_steps=JOB_NEXT_STEPS,
    custom_message=lambda form: (
        f"Thank you for applying for the {form.position_applying_for} position. "
        "We have received your application and our team will review it carefully."
    ),
    admin_recipient=_hr_address,
)

CONTACT = FormDefinition(
    form_type=FormType.CONTACT,
    label="Contact Inquiry",
    prefix="INQ",
    model=ContactInquiry,
    status="new",
    primary_name=lambda form: form.full_name,
    subject_name=lambda form: form.full_name,
    success_message=lambda _form: (
        "Thank you for your inquiry! We have received your message and will get back "
        "to you within 24 hours."
    ),
    admin_subject=lambda _form, reference: f"New Contact Inquiry - {reference}",
    renders_document=False,
    duplicate_guard=duplicates.identical_recent_message(),
    source="website_contact_form",
    additional_info=_contact_info,
    alert=lambda _form: "Please respond to this inquiry within 24 hours",
)

AVAILABILITY = FormDefinition(
    form_type=FormType.AVAILABILITY,
    label="Availability Request",
    prefix="AVL",
    model=AvailabilityRequest,
    status="pending",
    primary_name=lambda form: form.full_name,
    subject_name=lambda form: form.full_name,
    success_message=lambda _form: (
        "Your availability request has been submitted successfully! "
        "We will contact you within 24 hours."
    ),
    admin_subject=lambda _form, reference: f"New Availability Request - {reference}",
    renders_document=False,
    duplicate_guard=duplicates.same_phone(
        "A request with this phone number already exists",
        "Phone number already registered for availability check",
    ),
    conflict_message="A request with this phone number already exists",
    conflict_errors=["Phone number already registered for availability check"],
    additional_info=_availability_info,
    alert=lambda _form: "Please call this family back within 24 hours",
)

VISIT_BOOKING = FormDefinition(
    form_type=FormType.VISIT_BOOKING,
    label="Visit Booking",
    prefix="VISIT",
    model=VisitBooking,
    status="scheduled",
    primary_name=_parent,
    subject_name=lambda form: form.child_name,
    success_message=lambda _form: (
        "Your visit has been booked successfully! "
        "We'll send you a confirmation email shortly."
    ),
    admin_subject=lambda form, reference: f"New Visit Booking - {form.child_name} - {reference}",
    submitter_subject=lambda _form: "Visit Booking Confirmation - Thank You!",
    email_field="email",
    renders_document=False,
    duplicate_guard=duplicates.visit_slot_taken(),
    conflict_message=duplicates.SLOT_TAKEN_MESSAGE,
    conflict_errors=[duplicates.SLOT_TAKEN_ERROR],
    source="website_booking",
    additional_info=_visit_info,
    alert=lambda form: (
        f"Visit scheduled for {form.visit_date.strftime('%A %d %B')} at {form.visit_time}: "
        "please confirm availability and prepare for the visit"
    ),
    next_steps=[
        "Tour of our facilities and classrooms",
        "Meet our qualified staff members",
        "Discussion of our educational programmes",
        "Review of the enrolment process and fees",
        "Time to ask all your questions",
    ],
    custom_message=lambda form: (
        f"Your visit on {form.visit_date.strftime('%A %d %B %Y')} at {form.visit_time} "
        "is booked. "
        f"{form.child_name} is welcome to explore and play while you look around."
    ),
    reminder="If you need to reschedule or cancel, please give us at least 24 hours notice.",
)
