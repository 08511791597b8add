"""
Unit tests for form validation.

These tests cover:
- Valid payloads for every form type
- Independent rules (every failure reported at once)
- Conditional details for yes answers
- Applicant age boundary
- Phone normalisation and the enquiry phone rules
"""

from datetime import date

import pytest
from pydantic import ValidationError

from nursery_api.modules.submissions.models import FormType
from nursery_api.modules.submissions.schemas import (
    ContactFormData,
    JobApplicationData,
    RegistrationFormData,
)
from nursery_api.modules.submissions.validation import age_on, normalize_phone, validate

TODAY = date(2026, 6, 15)


class TestHelpers:
    """Tests for the small validation helpers."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("07700 900123", "07700900123"),
            ("(020) 3561-8257", "02035618257"),
            ("  +44 7700 900 321 ", "+447700900321"),
        ],
    )
    def test_normalize_phone(self, raw, expected):
        assert normalize_phone(raw) == expected

    def test_age_on_birthday(self):
        assert age_on(date(2010, 6, 15), date(2026, 6, 15)) == 16

    def test_age_on_day_before_birthday(self):
        assert age_on(date(2010, 6, 16), date(2026, 6, 15)) == 15


class TestValidPayloads:
    """Every form accepts its fixture payload."""

    @pytest.mark.parametrize(
        "form_type, fixture",
        [
            (FormType.REGISTRATION, "registration_payload"),
            (FormType.MEDICAL, "medical_payload"),
            (FormType.CONSENT, "consent_payload"),
            (FormType.FUNDING, "funding_payload"),
            (FormType.CHANGE, "change_payload"),
            (FormType.ABOUT_ME, "about_me_payload"),
            (FormType.JOB_APPLICATION, "job_application_payload"),
            (FormType.CONTACT, "contact_payload"),
            (FormType.AVAILABILITY, "availability_payload"),
            (FormType.WAITLIST, "availability_payload"),
            (FormType.VISIT_BOOKING, "visit_booking_payload"),
        ],
    )
    def test_valid(self, request, form_type, fixture):
        payload = request.getfixturevalue(fixture)
        result = validate(form_type, payload, today=TODAY)

        assert result.is_valid, result.errors
        assert result.form.form_type == form_type

    def test_registration_cleans_values(self, registration_payload):
        result = validate(FormType.REGISTRATION, registration_payload, today=TODAY)
        form = result.form

        assert isinstance(form, RegistrationFormData)
        assert form.parent1_email == "grace.okafor@example.com"
        assert form.parent1_parental_responsibility == "yes"
        assert form.child_dob == date(2023, 3, 14)
        assert form.signed_date == date(2026, 6, 1)
        assert form.photo_consent is True
        assert form.outings_consent is False

    def test_validated_form_is_immutable(self, contact_payload):
        form = validate(FormType.CONTACT, contact_payload).form
        with pytest.raises(ValidationError):
            form.message = "changed"

    def test_contact_phone_normalised(self, contact_payload):
        form = validate(FormType.CONTACT, contact_payload).form

        assert isinstance(form, ContactFormData)
        assert form.phone_number == "07700 900123"
        assert form.phone_normalized == "07700900123"

    def test_job_application_uppercases_ni_number(self, job_application_payload):
        form = validate(FormType.JOB_APPLICATION, job_application_payload, today=TODAY).form

        assert isinstance(form, JobApplicationData)
        assert form.national_insurance_number == "AB123456D"
        assert form.email_address == "samuel.mensah@example.com"


class TestErrorCollection:
    """Rules run independently and every failure is reported."""

    def test_non_object_body(self):
        result = validate(FormType.CONTACT, ["not", "an", "object"])
        assert result.errors == ["Request body must be a JSON object"]
        assert result.form is None

    def test_empty_contact_reports_every_field(self):
        result = validate(FormType.CONTACT, {})

        assert not result.is_valid
        assert result.errors == [
            "Full name is required and must be at least 2 characters long",
            "Phone number is required and must be at least 10 characters long",
            "Message is required and must be at least 10 characters long",
        ]

    def test_independent_failures_in_one_response(self, registration_payload):
        """Three unrelated bad fields produce three messages."""
        registration_payload["parent1Email"] = "not-an-email"
        registration_payload["daysAttending"] = []
        registration_payload["declarationConfirm"] = False

        result = validate(FormType.REGISTRATION, registration_payload, today=TODAY)

        assert "Please enter a valid email address" in result.errors
        assert "Please select at least one day of attendance" in result.errors
        assert "You must confirm the declaration to submit your application" in result.errors
        assert len(result.errors) == 3

    def test_unknown_weekday_rejected(self, registration_payload):
        registration_payload["daysAttending"] = ["Mon", "Sat"]
        result = validate(FormType.REGISTRATION, registration_payload, today=TODAY)
        assert result.errors == ["Days attending contains an unknown option: Sat"]

    def test_declaration_must_be_strictly_true(self, registration_payload):
        registration_payload["declarationConfirm"] = "true"
        result = validate(FormType.REGISTRATION, registration_payload, today=TODAY)
        assert "You must confirm the declaration to submit your application" in result.errors

    def test_invalid_date(self, change_payload):
        change_payload["effectiveFrom"] = "31/02/2026"
        result = validate(FormType.CHANGE, change_payload, today=TODAY)
        assert result.errors == ["Effective from date must be a valid date"]

    def test_contact_message_too_long(self, contact_payload):
        contact_payload["message"] = "x" * 1001
        result = validate(FormType.CONTACT, contact_payload)
        assert result.errors == ["Message must be less than 1000 characters"]

    def test_contact_short_phone(self, contact_payload):
        contact_payload["phoneNumber"] = "0770 0900"
        result = validate(FormType.CONTACT, contact_payload)
        assert "Phone number is required and must be at least 10 characters long" in result.errors

    def test_contact_phone_with_letters(self, contact_payload):
        contact_payload["phoneNumber"] = "07700 9OO123"
        result = validate(FormType.CONTACT, contact_payload)
        assert result.errors == ["Please enter a valid phone number"]

    def test_padded_phone_longer_than_column_rejected(self):
        """Formatting characters are stripped for the digit check, not for the stored value."""
        result = validate(
            FormType.WAITLIST,
            {"fullName": "Jane Doe", "phoneNumber": "0 - 7 - 7 - 1 - 2 - 3 - 4 - 5 - 6 - 7 - 8"},
        )
        assert result.errors == ["Phone number must be at most 30 characters long"]

    def test_phone_at_column_width_accepted(self, registration_payload):
        registration_payload["parent1Phone"] = "+44 (0) 7700 - 900 - 123 - 45"
        assert len(registration_payload["parent1Phone"]) <= 30
        result = validate(FormType.REGISTRATION, registration_payload, today=TODAY)
        assert result.is_valid, result.errors

    def test_email_longer_than_column_rejected(self, medical_payload):
        medical_payload["parentEmail"] = f"{'a' * 250}@example.com"
        result = validate(FormType.MEDICAL, medical_payload, today=TODAY)
        assert result.errors == ["Parent/carer email must be at most 255 characters long"]

    def test_funding_requires_every_confirmation(self, funding_payload):
        for key in (
            "confirmAccuracy",
            "confirmNotifyChanges",
            "confirmCheckEligibility",
            "confirmAdditionalCharges",
        ):
            funding_payload.pop(key)

        result = validate(FormType.FUNDING, funding_payload, today=TODAY)
        assert len(result.errors) == 4

    def test_funding_unknown_type(self, funding_payload):
        funding_payload["fundingTypes"] = ["60 hours"]
        result = validate(FormType.FUNDING, funding_payload, today=TODAY)
        assert result.errors == ["Funding types contains an unknown option: 60 hours"]

    def test_consent_flag_must_be_boolean(self, consent_payload):
        consent_payload["localWalks"] = "yes"
        result = validate(FormType.CONSENT, consent_payload, today=TODAY)
        assert result.errors == ["Local walks and outings must be true or false"]


class TestConditionalDetails:
    """Follow-up details are required only after a yes answer."""

    def test_medical_allergy_details_required(self, medical_payload):
        medical_payload.pop("allergiesDetails")
        result = validate(FormType.MEDICAL, medical_payload, today=TODAY)
        assert result.errors == ["Please give details of the allergies"]

    def test_medical_details_not_required_for_no(self, medical_payload):
        medical_payload["hasAllergies"] = "No"
        medical_payload.pop("allergiesDetails")
        result = validate(FormType.MEDICAL, medical_payload, today=TODAY)
        assert result.is_valid
        assert result.form.has_allergies == "no"

    def test_job_convictions_details_required(self, job_application_payload):
        job_application_payload["criminalConvictions"] = "yes"
        result = validate(FormType.JOB_APPLICATION, job_application_payload, today=TODAY)
        assert result.errors == ["Please provide details of your criminal convictions"]

    def test_yes_no_rejects_other_answers(self, job_application_payload):
        job_application_payload["rightToWorkUK"] = "maybe"
        result = validate(FormType.JOB_APPLICATION, job_application_payload, today=TODAY)
        assert result.errors == ["Please specify if you have the right to work in the UK"]


class TestApplicantAge:
    """Job applicants must be at least 16 on the day they apply."""

    def test_sixteenth_birthday_today_accepted(self, job_application_payload):
        job_application_payload["dateOfBirth"] = "2010-06-15"
        result = validate(FormType.JOB_APPLICATION, job_application_payload, today=TODAY)
        assert result.is_valid, result.errors

    def test_one_day_short_rejected(self, job_application_payload):
        job_application_payload["dateOfBirth"] = "2010-06-16"
        result = validate(FormType.JOB_APPLICATION, job_application_payload, today=TODAY)
        assert result.errors == ["Applicant must be at least 16 years old"]

    def test_job_limits(self, job_application_payload):
        job_application_payload["employmentHistory"] = "x" * 3001
        job_application_payload["whyWorkHere"] = "x" * 1501
        result = validate(FormType.JOB_APPLICATION, job_application_payload, today=TODAY)
        assert result.errors == [
            "Employment history must be less than 3000 characters",
            "Why work here section must be less than 1500 characters",
        ]


class TestVisitBooking:
    """Visit bookings: weekday slots from today onwards."""

    def test_cleans_values(self, visit_booking_payload, visit_date):
        result = validate(FormType.VISIT_BOOKING, visit_booking_payload, today=TODAY)

        assert result.form.email == "grace.okafor@example.com"
        assert result.form.visit_date == visit_date
        assert result.form.child_age == 2

    def test_message_optional(self, visit_booking_payload):
        visit_booking_payload.pop("message")
        result = validate(FormType.VISIT_BOOKING, visit_booking_payload, today=TODAY)
        assert result.form.message == ""

    def test_past_date_rejected(self, visit_booking_payload):
        visit_booking_payload["visitDate"] = "2026-06-12"
        result = validate(FormType.VISIT_BOOKING, visit_booking_payload, today=TODAY)
        assert result.errors == ["Visit date cannot be in the past"]

    def test_today_accepted(self, visit_booking_payload):
        visit_booking_payload["visitDate"] = TODAY.isoformat()
        result = validate(FormType.VISIT_BOOKING, visit_booking_payload, today=TODAY)
        assert result.is_valid, result.errors

    def test_weekend_rejected(self, visit_booking_payload):
        visit_booking_payload["visitDate"] = "2026-06-20"
        result = validate(FormType.VISIT_BOOKING, visit_booking_payload, today=TODAY)
        assert result.errors == ["Visits are not available on weekends"]

    def test_unknown_time_slot(self, visit_booking_payload):
        visit_booking_payload["visitTime"] = "1:00 PM"
        result = validate(FormType.VISIT_BOOKING, visit_booking_payload, today=TODAY)
        assert result.errors == ["Please select a valid visit time"]

    @pytest.mark.parametrize("age", [-1, 13, "2", True, None])
    def test_child_age_must_be_whole_number_in_range(self, visit_booking_payload, age):
        visit_booking_payload["childAge"] = age
        result = validate(FormType.VISIT_BOOKING, visit_booking_payload, today=TODAY)
        assert result.errors == ["Child age must be a number between 0 and 12"]

    def test_every_failure_reported(self):
        result = validate(FormType.VISIT_BOOKING, {}, today=TODAY)
        assert result.errors == [
            "Parent name is required and must be at least 2 characters long",
            "Child name is required and must be at least 2 characters long",
            "Child age must be a number between 0 and 12",
            "Email is required",
            "Phone number is required and must be at least 10 characters long",
            "Visit date is required",
            "Please select a valid visit time",
        ]
