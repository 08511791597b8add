"""
Submission Schemas

Validated form variants and response payloads.

A validated form is immutable and tagged with its ``form_type``; the
``SubmittedForm`` union discriminates on that tag. Field aliases are the
camelCase keys the website posts, so validated values round-trip through the
same names the rule set reports on.
"""

from datetime import date, datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nursery_api.core.responses import CamelModel
from nursery_api.modules.submissions.models import FormType


class ValidatedForm(BaseModel):
    """Base for validated, immutable form payloads."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class RegistrationFormData(ValidatedForm):
    form_type: Literal[FormType.REGISTRATION] = FormType.REGISTRATION

    child_full_name: str
    child_dob: date = Field(alias="childDOB")
    child_nhs: str | None = Field(None, alias="childNHS")
    child_gender: str | None = None
    home_address: str
    postcode: str
    ethnicity: str | None = None
    religion: str | None = None
    first_languages: list[str] = []
    festivals: str | None = None

    parent1_name: str
    parent1_relationship: str
    parent1_email: str
    parent1_phone: str
    parent1_parental_responsibility: str
    parent2_name: str | None = None
    parent2_relationship: str | None = None
    parent2_email: str | None = None
    parent2_phone: str | None = None
    parent2_parental_responsibility: str | None = None

    emergency_contact1: str
    emergency_contact2: str
    not_authorised: str | None = None
    collection_password: str | None = None

    gp_name: str
    gp_address: str | None = None
    immunisations: str
    allergies: str | None = None
    medication: str | None = None
    dietary_needs: list[str] = []
    send_support: str | None = None
    send_details: str | None = None

    start_date: date
    days_attending: list[str]
    session_type: str
    funded_hours: str

    emergency_treatment: bool = False
    photo_consent: bool = False
    outings_consent: bool = False
    sun_cream_consent: bool = False
    declaration_confirm: bool
    parent_name: str
    signed_date: date = Field(alias="date")


class MedicalFormData(ValidatedForm):
    form_type: Literal[FormType.MEDICAL] = FormType.MEDICAL

    child_full_name: str
    child_dob: date = Field(alias="childDOB")
    home_address: str
    postcode: str
    gp_name: str
    gp_address: str
    health_visitor: str | None = None

    has_medical_conditions: str
    medical_conditions_details: str | None = None
    has_allergies: str
    allergies_details: str | None = None
    on_long_term_medication: str
    long_term_medication_details: str | None = None

    medication_name: str | None = None
    medication_dosage: str | None = None
    medication_frequency: str | None = None
    medication_storage: str | None = None
    medication_start_date: date | None = None
    medication_end_date: date | None = None

    medication_admin_consent: bool = False
    medication_container_consent: bool = False
    emergency_first_aid: bool = False
    emergency_services_consent: bool = False
    emergency_contact_consent: bool = False
    hospital_accompany_consent: bool = False

    parent_name: str
    parent_email: str
    signed_date: date = Field(alias="date")


class ConsentFormData(ValidatedForm):
    form_type: Literal[FormType.CONSENT] = FormType.CONSENT

    child_full_name: str
    child_dob: date = Field(alias="childDOB")

    local_walks: bool = False
    photo_displays: bool = False
    photo_learning_journal: bool = False
    group_photos: bool = False
    emergency_medical: bool = False
    sun_cream: bool = False
    face_painting: bool = False
    toothbrushing: bool = False
    student_observations: bool = False
    pets_animals: bool = False
    first_aid_plasters: bool = False
    additional_comments: str | None = None

    parent_name: str
    parent_email: str
    signed_date: date = Field(alias="date")


class FundingDeclarationData(ValidatedForm):
    form_type: Literal[FormType.FUNDING] = FormType.FUNDING

    child_full_name: str
    child_dob: date = Field(alias="childDOB")
    home_address: str
    postcode: str
    parent_full_name: str
    parent_email: str
    national_insurance_number: str
    employment_status: str
    thirty_hour_code: str | None = None
    funding_types: list[str]

    confirm_accuracy: bool
    confirm_notify_changes: bool
    confirm_check_eligibility: bool
    confirm_additional_charges: bool
    signed_date: date = Field(alias="date")


class ChangeOfDetailsData(ValidatedForm):
    form_type: Literal[FormType.CHANGE] = FormType.CHANGE

    child_full_name: str
    child_dob: date = Field(alias="childDOB")
    change_types: list[str]
    new_information: str
    effective_from: date
    parent_name: str
    parent_email: str
    signed_date: date = Field(alias="date")


class AboutMeData(ValidatedForm):
    form_type: Literal[FormType.ABOUT_ME] = FormType.ABOUT_ME

    child_full_name: str
    child_dob: date = Field(alias="childDOB")
    preferred_name: str | None = None
    languages_spoken: list[str] = []
    siblings: str | None = None
    personality: list[str] = []
    emotional_expression: str | None = None
    fears_or_dislikes: str | None = None

    feeds_themselves: str | None = None
    preferred_foods: str | None = None
    foods_to_avoid: str | None = None
    uses_cutlery: str | None = None
    allergies_or_intolerances: str | None = None

    takes_naps: str | None = None
    nap_time: str | None = None
    comfort_item: str | None = None
    sleep_routine: str | None = None

    toilet_trained: str | None = None
    toilet_use: list[str] = []
    toileting_routines: str | None = None

    favourite_toys: str | None = None
    favourite_songs: str | None = None
    dislikes: str | None = None
    what_makes_happy: str | None = None
    cultural_needs: str | None = None
    festivals_and_events: str | None = None
    parental_hopes: str | None = None
    concerns: str | None = None

    parent_name: str
    parent_email: str
    signed_date: date = Field(alias="date")


class JobApplicationData(ValidatedForm):
    form_type: Literal[FormType.JOB_APPLICATION] = FormType.JOB_APPLICATION

    position_applying_for: str
    full_name: str
    date_of_birth: date
    national_insurance_number: str
    email_address: str
    phone_number: str
    full_home_address: str

    right_to_work_uk: str = Field(alias="rightToWorkUK")
    current_dbs_certificate: str = Field(alias="currentDBSCertificate")
    dbs_certificate_number: str | None = None
    criminal_convictions: str
    criminal_convictions_details: str | None = None

    qualifications: str
    relevant_training: str | None = None
    employment_history: str
    employment_gaps: str | None = None
    references: str
    why_work_here: str

    declaration: bool
    application_date: date = Field(alias="date")


class ContactFormData(ValidatedForm):
    form_type: Literal[FormType.CONTACT] = FormType.CONTACT

    full_name: str
    phone_number: str
    phone_normalized: str
    message: str


class AvailabilityFormData(ValidatedForm):
    form_type: Literal[FormType.AVAILABILITY] = FormType.AVAILABILITY

    full_name: str
    phone_number: str
    phone_normalized: str
    children_details: str = ""


class VisitBookingFormData(ValidatedForm):
    form_type: Literal[FormType.VISIT_BOOKING] = FormType.VISIT_BOOKING

    parent_name: str
    child_name: str
    child_age: int
    email: str
    phone: str
    visit_date: date
    visit_time: str
    message: str = ""


class WaitlistFormData(ValidatedForm):
    form_type: Literal[FormType.WAITLIST] = FormType.WAITLIST

    full_name: str
    phone_number: str
    phone_normalized: str
    children_details: str = ""


SubmittedForm = Annotated[
    Union[
        RegistrationFormData,
        MedicalFormData,
        ConsentFormData,
        FundingDeclarationData,
        ChangeOfDetailsData,
        AboutMeData,
        JobApplicationData,
        ContactFormData,
        AvailabilityFormData,
        VisitBookingFormData,
        WaitlistFormData,
    ],
    Field(discriminator="form_type"),
]


# ============================================
# Responses
# ============================================


class SubmissionData(CamelModel):
    """Payload returned in the ``data`` field of a 201 response."""

    id: UUID
    reference: str
    status: str
    submitted_at: datetime


class JobApplicationSubmissionData(SubmissionData):
    position_applying_for: str
    next_steps: list[str]


class VisitBookingSubmissionData(SubmissionData):
    visit_date: date
    visit_time: str
