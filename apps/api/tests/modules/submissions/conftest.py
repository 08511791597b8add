"""
Fixtures for submissions tests.

Every payload fixture returns a fresh, valid body in the camelCase shape the
website posts; tests mutate it to exercise a single rule.
"""

from datetime import date, timedelta

import pytest

from nursery_api.modules.submissions.validation import validate

TODAY = date(2026, 6, 15)


@pytest.fixture
def registration_payload():
    return {
        "childFullName": "Ada Okafor",
        "childDOB": "2023-03-14",
        "childGender": "Female",
        "homeAddress": "12 Holmesdale Road, London",
        "postcode": "SE25 6HS",
        "firstLanguages": ["English", "Igbo"],
        "parent1Name": "Grace Okafor",
        "parent1Relationship": "Mother",
        "parent1Email": "Grace.Okafor@Example.com",
        "parent1Phone": "07700 900123",
        "parent1ParentalResponsibility": "Yes",
        "emergencyContact1": "Chidi Okafor - 07700 900456",
        "emergencyContact2": "Ngozi Eze - 07700 900789",
        "gpName": "Dr Patel, Woodside Surgery",
        "immunisations": "Up to date",
        "dietaryNeeds": ["Vegetarian"],
        "startDate": "2026-09-01",
        "daysAttending": ["Mon", "Wed", "Fri"],
        "sessionType": "Full Day",
        "fundedHours": "15 hours",
        "emergencyTreatment": True,
        "photoConsent": True,
        "declarationConfirm": True,
        "parentName": "Grace Okafor",
        "date": "2026-06-01",
    }


@pytest.fixture
def medical_payload():
    return {
        "childFullName": "Ada Okafor",
        "childDOB": "2023-03-14",
        "homeAddress": "12 Holmesdale Road, London",
        "postcode": "SE25 6HS",
        "gpName": "Dr Patel",
        "gpAddress": "Woodside Surgery, London",
        "hasMedicalConditions": "no",
        "hasAllergies": "yes",
        "allergiesDetails": "Peanuts - carries an EpiPen",
        "onLongTermMedication": "no",
        "medicationAdminConsent": True,
        "emergencyFirstAid": True,
        "parentName": "Grace Okafor",
        "parentEmail": "grace@example.com",
        "date": "2026-06-01",
    }


@pytest.fixture
def consent_payload():
    return {
        "childFullName": "Ada Okafor",
        "childDOB": "2023-03-14",
        "localWalks": True,
        "photoDisplays": True,
        "sunCream": True,
        "facePainting": False,
        "parentName": "Grace Okafor",
        "parentEmail": "grace@example.com",
        "date": "2026-06-01",
    }


@pytest.fixture
def funding_payload():
    return {
        "childFullName": "Ada Okafor",
        "childDOB": "2023-03-14",
        "homeAddress": "12 Holmesdale Road, London",
        "postcode": "SE25 6HS",
        "parentFullName": "Grace Okafor",
        "parentEmail": "grace@example.com",
        "nationalInsuranceNumber": "qq123456c",
        "employmentStatus": "Employed",
        "fundingTypes": ["15 hours universal (3 & 4 year olds)"],
        "confirmAccuracy": True,
        "confirmNotifyChanges": True,
        "confirmCheckEligibility": True,
        "confirmAdditionalCharges": True,
        "date": "2026-06-01",
    }


@pytest.fixture
def change_payload():
    return {
        "childFullName": "Ada Okafor",
        "childDOB": "2023-03-14",
        "changeTypes": ["Home Address"],
        "newInformation": "We have moved to 4 Albert Road, SE25 4JE",
        "effectiveFrom": "2026-07-01",
        "parentName": "Grace Okafor",
        "parentEmail": "grace@example.com",
        "date": "2026-06-01",
    }


@pytest.fixture
def about_me_payload():
    return {
        "childFullName": "Ada Okafor",
        "childDOB": "2023-03-14",
        "preferredName": "Ada",
        "languagesSpoken": ["English"],
        "personality": ["Curious", "Chatty"],
        "comfortItem": "Blue rabbit",
        "favouriteSongs": "Twinkle Twinkle",
        "parentName": "Grace Okafor",
        "parentEmail": "grace@example.com",
        "date": "2026-06-01",
    }


@pytest.fixture
def job_application_payload():
    return {
        "positionApplyingFor": "Nursery Practitioner",
        "fullName": "Samuel Mensah",
        "dateOfBirth": "1995-04-20",
        "nationalInsuranceNumber": "ab123456d",
        "emailAddress": "Samuel.Mensah@Example.com",
        "phoneNumber": "+44 7700 900321",
        "fullHomeAddress": "8 Portland Road, London SE25 4UF",
        "rightToWorkUK": "yes",
        "currentDBSCertificate": "yes",
        "dbsCertificateNumber": "001234567890",
        "criminalConvictions": "no",
        "qualifications": "CACHE Level 3 Diploma in Early Years Education",
        "employmentHistory": "2019-2025 Room leader, Little Acorns Nursery",
        "references": "Jane Smith, Manager, Little Acorns - jane@littleacorns.test",
        "whyWorkHere": "I want to work in a small, community-focused setting.",
        "declaration": True,
        "date": "2026-06-01",
    }


@pytest.fixture
def contact_payload():
    return {
        "fullName": "Grace Okafor",
        "phoneNumber": "07700 900123",
        "message": "Do you have any places for a two year old from September?",
    }


@pytest.fixture
def availability_payload():
    return {
        "fullName": "Grace Okafor",
        "phoneNumber": "07700 900123",
        "childrenDetails": "One child, aged 2",
    }


def next_weekday(after: date) -> date:
    day = after + timedelta(days=1)
    while day.weekday() >= 5:
        day += timedelta(days=1)
    return day


@pytest.fixture
def visit_date():
    """A weekday that is in the future both for TODAY and for the real date."""
    return next_weekday(max(date.today(), TODAY) + timedelta(days=7))


@pytest.fixture
def visit_booking_payload(visit_date):
    return {
        "parentName": "Grace Okafor",
        "childName": "Ada Okafor",
        "childAge": 2,
        "email": "Grace.Okafor@Example.com",
        "phone": "07700 900123",
        "visitDate": visit_date.isoformat(),
        "visitTime": "10:00 AM",
        "message": "We would love to see the garden",
    }


@pytest.fixture
def validated():
    """Validate a payload and return the immutable form, failing loudly if it is invalid."""

    def _validated(form_type, payload):
        result = validate(form_type, payload, today=TODAY)
        assert result.is_valid, result.errors
        return result.form

    return _validated
