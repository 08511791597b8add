"""Create submission and waitlist tables

Revision ID: a7c1e9d2b4f0
Revises:
Create Date: 2026-10-19

One table per form type. Every table carries the shared submission columns
(id, reference, status, timestamps, user agent, back-office columns) with
indexes on reference (unique), status and created_at. Waitlist entries and
availability requests are unique on the normalised phone number.
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "a7c1e9d2b4f0"
down_revision = None
branch_labels = None
depends_on = None

TABLES = (
    "registration_applications",
    "medical_forms",
    "consent_forms",
    "funding_declarations",
    "change_requests",
    "about_me_forms",
    "job_applications",
    "contact_inquiries",
    "availability_requests",
    "waitlist_entries",
)


def _submission_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("reference", sa.String(40), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_agent", sa.String(500), nullable=False, server_default="unknown"),
        sa.Column("priority", sa.String(16), nullable=False, server_default="normal"),
        sa.Column("source", sa.String(50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _flag(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.Boolean(), nullable=nullable, server_default=sa.false())


def _child_columns() -> list[sa.Column]:
    return [
        sa.Column("child_full_name", sa.String(200), nullable=False),
        sa.Column("child_dob", sa.Date(), nullable=False),
    ]


def _sign_off_columns() -> list[sa.Column]:
    return [
        sa.Column("parent_name", sa.String(200), nullable=False),
        sa.Column("parent_email", sa.String(255), nullable=False),
        sa.Column("signed_date", sa.Date(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "registration_applications",
        *_submission_columns(),
        *_child_columns(),
        sa.Column("child_nhs", sa.String(50), nullable=True),
        sa.Column("child_gender", sa.String(50), nullable=True),
        sa.Column("home_address", sa.String(500), nullable=False),
        sa.Column("postcode", sa.String(20), nullable=False),
        sa.Column("ethnicity", sa.String(100), nullable=True),
        sa.Column("religion", sa.String(100), nullable=True),
        sa.Column("first_languages", sa.JSON(), nullable=False),
        sa.Column("festivals", sa.Text(), nullable=True),
        sa.Column("parent1_name", sa.String(200), nullable=False),
        sa.Column("parent1_relationship", sa.String(50), nullable=False),
        sa.Column("parent1_email", sa.String(255), nullable=False),
        sa.Column("parent1_phone", sa.String(30), nullable=False),
        sa.Column("parent1_parental_responsibility", sa.String(3), nullable=False),
        sa.Column("parent2_name", sa.String(200), nullable=True),
        sa.Column("parent2_relationship", sa.String(50), nullable=True),
        sa.Column("parent2_email", sa.String(255), nullable=True),
        sa.Column("parent2_phone", sa.String(30), nullable=True),
        sa.Column("parent2_parental_responsibility", sa.String(3), nullable=True),
        sa.Column("emergency_contact1", sa.String(500), nullable=False),
        sa.Column("emergency_contact2", sa.String(500), nullable=False),
        sa.Column("not_authorised", sa.Text(), nullable=True),
        sa.Column("collection_password", sa.String(100), nullable=True),
        sa.Column("gp_name", sa.String(200), nullable=False),
        sa.Column("gp_address", sa.String(500), nullable=True),
        sa.Column("immunisations", sa.String(200), nullable=False),
        sa.Column("allergies", sa.Text(), nullable=True),
        sa.Column("medication", sa.Text(), nullable=True),
        sa.Column("dietary_needs", sa.JSON(), nullable=False),
        sa.Column("send_support", sa.String(3), nullable=True),
        sa.Column("send_details", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("days_attending", sa.JSON(), nullable=False),
        sa.Column("session_type", sa.String(20), nullable=False),
        sa.Column("funded_hours", sa.String(50), nullable=False),
        _flag("emergency_treatment"),
        _flag("photo_consent"),
        _flag("outings_consent"),
        _flag("sun_cream_consent"),
        sa.Column("declaration_confirm", sa.Boolean(), nullable=False),
        sa.Column("parent_name", sa.String(200), nullable=False),
        sa.Column("signed_date", sa.Date(), nullable=False),
    )
    op.create_index(
        "ix_registration_applications_parent1_email",
        "registration_applications",
        ["parent1_email"],
    )

    op.create_table(
        "medical_forms",
        *_submission_columns(),
        *_child_columns(),
        sa.Column("home_address", sa.String(500), nullable=False),
        sa.Column("postcode", sa.String(20), nullable=False),
        sa.Column("gp_name", sa.String(200), nullable=False),
        sa.Column("gp_address", sa.String(500), nullable=False),
        sa.Column("health_visitor", sa.String(200), nullable=True),
        sa.Column("has_medical_conditions", sa.String(3), nullable=False),
        sa.Column("medical_conditions_details", sa.Text(), nullable=True),
        sa.Column("has_allergies", sa.String(3), nullable=False),
        sa.Column("allergies_details", sa.Text(), nullable=True),
        sa.Column("on_long_term_medication", sa.String(3), nullable=False),
        sa.Column("long_term_medication_details", sa.Text(), nullable=True),
        sa.Column("medication_name", sa.String(200), nullable=True),
        sa.Column("medication_dosage", sa.String(200), nullable=True),
        sa.Column("medication_frequency", sa.String(200), nullable=True),
        sa.Column("medication_storage", sa.String(200), nullable=True),
        sa.Column("medication_start_date", sa.Date(), nullable=True),
        sa.Column("medication_end_date", sa.Date(), nullable=True),
        _flag("medication_admin_consent"),
        _flag("medication_container_consent"),
        _flag("emergency_first_aid"),
        _flag("emergency_services_consent"),
        _flag("emergency_contact_consent"),
        _flag("hospital_accompany_consent"),
        *_sign_off_columns(),
    )

    op.create_table(
        "consent_forms",
        *_submission_columns(),
        *_child_columns(),
        _flag("local_walks"),
        _flag("photo_displays"),
        _flag("photo_learning_journal"),
        _flag("group_photos"),
        _flag("emergency_medical"),
        _flag("sun_cream"),
        _flag("face_painting"),
        _flag("toothbrushing"),
        _flag("student_observations"),
        _flag("pets_animals"),
        _flag("first_aid_plasters"),
        sa.Column("additional_comments", sa.Text(), nullable=True),
        *_sign_off_columns(),
    )

    op.create_table(
        "funding_declarations",
        *_submission_columns(),
        *_child_columns(),
        sa.Column("home_address", sa.String(500), nullable=False),
        sa.Column("postcode", sa.String(20), nullable=False),
        sa.Column("parent_full_name", sa.String(200), nullable=False),
        sa.Column("parent_email", sa.String(255), nullable=False),
        sa.Column("national_insurance_number", sa.String(20), nullable=False),
        sa.Column("employment_status", sa.String(100), nullable=False),
        sa.Column("thirty_hour_code", sa.String(50), nullable=True),
        sa.Column("funding_types", sa.JSON(), nullable=False),
        sa.Column("confirm_accuracy", sa.Boolean(), nullable=False),
        sa.Column("confirm_notify_changes", sa.Boolean(), nullable=False),
        sa.Column("confirm_check_eligibility", sa.Boolean(), nullable=False),
        sa.Column("confirm_additional_charges", sa.Boolean(), nullable=False),
        sa.Column("signed_date", sa.Date(), nullable=False),
    )

    op.create_table(
        "change_requests",
        *_submission_columns(),
        *_child_columns(),
        sa.Column("change_types", sa.JSON(), nullable=False),
        sa.Column("new_information", sa.Text(), nullable=False),
        sa.Column("effective_from", sa.Date(), nullable=False),
        *_sign_off_columns(),
    )

    op.create_table(
        "about_me_forms",
        *_submission_columns(),
        *_child_columns(),
        sa.Column("preferred_name", sa.String(100), nullable=True),
        sa.Column("languages_spoken", sa.JSON(), nullable=False),
        sa.Column("siblings", sa.Text(), nullable=True),
        sa.Column("personality", sa.JSON(), nullable=False),
        sa.Column("emotional_expression", sa.Text(), nullable=True),
        sa.Column("fears_or_dislikes", sa.Text(), nullable=True),
        sa.Column("feeds_themselves", sa.String(100), nullable=True),
        sa.Column("preferred_foods", sa.Text(), nullable=True),
        sa.Column("foods_to_avoid", sa.Text(), nullable=True),
        sa.Column("uses_cutlery", sa.String(100), nullable=True),
        sa.Column("allergies_or_intolerances", sa.Text(), nullable=True),
        sa.Column("takes_naps", sa.String(100), nullable=True),
        sa.Column("nap_time", sa.String(100), nullable=True),
        sa.Column("comfort_item", sa.String(200), nullable=True),
        sa.Column("sleep_routine", sa.Text(), nullable=True),
        sa.Column("toilet_trained", sa.String(100), nullable=True),
        sa.Column("toilet_use", sa.JSON(), nullable=False),
        sa.Column("toileting_routines", sa.Text(), nullable=True),
        sa.Column("favourite_toys", sa.Text(), nullable=True),
        sa.Column("favourite_songs", sa.Text(), nullable=True),
        sa.Column("dislikes", sa.Text(), nullable=True),
        sa.Column("what_makes_happy", sa.Text(), nullable=True),
        sa.Column("cultural_needs", sa.Text(), nullable=True),
        sa.Column("festivals_and_events", sa.Text(), nullable=True),
        sa.Column("parental_hopes", sa.Text(), nullable=True),
        sa.Column("concerns", sa.Text(), nullable=True),
        *_sign_off_columns(),
    )

    op.create_table(
        "job_applications",
        *_submission_columns(),
        sa.Column("position_applying_for", sa.String(200), nullable=False),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("national_insurance_number", sa.String(20), nullable=False),
        sa.Column("email_address", sa.String(255), nullable=False),
        sa.Column("phone_number", sa.String(30), nullable=False),
        sa.Column("full_home_address", sa.String(500), nullable=False),
        sa.Column("right_to_work_uk", sa.String(3), nullable=False),
        sa.Column("current_dbs_certificate", sa.String(3), nullable=False),
        sa.Column("dbs_certificate_number", sa.String(50), nullable=True),
        sa.Column("criminal_convictions", sa.String(3), nullable=False),
        sa.Column("criminal_convictions_details", sa.Text(), nullable=True),
        sa.Column("qualifications", sa.Text(), nullable=False),
        sa.Column("relevant_training", sa.Text(), nullable=True),
        sa.Column("employment_history", sa.Text(), nullable=False),
        sa.Column("employment_gaps", sa.Text(), nullable=True),
        sa.Column("references", sa.Text(), nullable=False),
        sa.Column("why_work_here", sa.Text(), nullable=False),
        sa.Column("declaration", sa.Boolean(), nullable=False),
        sa.Column("application_date", sa.Date(), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        _flag("interview_scheduled"),
    )
    op.create_index(
        "ix_job_applications_email_position",
        "job_applications",
        ["email_address", "position_applying_for"],
    )

    op.create_table(
        "contact_inquiries",
        *_submission_columns(),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("phone_number", sa.String(30), nullable=False),
        sa.Column("phone_normalized", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_contact_inquiries_phone_normalized", "contact_inquiries", ["phone_normalized"]
    )

    op.create_table(
        "availability_requests",
        *_submission_columns(),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("phone_number", sa.String(30), nullable=False),
        sa.Column("phone_normalized", sa.String(20), nullable=False, unique=True),
        sa.Column("children_details", sa.Text(), nullable=False, server_default=""),
    )

    op.create_table(
        "waitlist_entries",
        *_submission_columns(),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("phone_number", sa.String(30), nullable=False),
        sa.Column("phone_normalized", sa.String(20), nullable=False, unique=True),
        sa.Column("children_details", sa.Text(), nullable=False, server_default=""),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("contacted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_waitlist_entries_status_created_at", "waitlist_entries", ["status", "created_at"]
    )

    # Shared submission indexes
    for table in TABLES:
        op.create_index(f"ix_{table}_reference", table, ["reference"], unique=True)
        op.create_index(f"ix_{table}_status", table, ["status"])
        op.create_index(f"ix_{table}_created_at", table, ["created_at"])

    for table in ("medical_forms", "consent_forms", "change_requests", "about_me_forms"):
        op.create_index(f"ix_{table}_parent_email", table, ["parent_email"])
    op.create_index(
        "ix_funding_declarations_parent_email", "funding_declarations", ["parent_email"]
    )


def downgrade() -> None:
    for table in reversed(TABLES):
        op.drop_table(table)
