"""
Form Validation

Per-form rule sets over the raw JSON body. Every rule runs independently and
every violation is collected, so the caller can show the whole list at once.
Validation is pure: no I/O, and the current date can be injected for the
age rule.

On success the cleaned values (trimmed strings, lower-cased yes/no answers,
parsed dates, normalised phone numbers) are loaded into the immutable
validated-form model for the form type.
"""

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from nursery_api.modules.submissions.models import FormType
from nursery_api.modules.submissions.schemas import (
    AboutMeData,
    AvailabilityFormData,
    ChangeOfDetailsData,
    ConsentFormData,
    ContactFormData,
    FundingDeclarationData,
    JobApplicationData,
    MedicalFormData,
    RegistrationFormData,
    SubmittedForm,
    ValidatedForm,
    VisitBookingFormData,
    WaitlistFormData,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_FORMATTING = re.compile(r"[\s\-()]")

# Column widths: phone columns are String(30), email columns String(255)
PHONE_MAX_LENGTH = 30
EMAIL_MAX_LENGTH = 255

DEFAULT_TEXT_LIMIT = 2000
YES_NO = ("yes", "no")


def normalize_phone(value: str) -> str:
    """Strip spaces, dashes and parentheses from a phone number."""
    return PHONE_FORMATTING.sub("", value.strip())


@dataclass(frozen=True)
class PhonePolicy:
    """Accepted shape of a phone number for one form."""

    pattern: re.Pattern[str]
    invalid_message: str
    min_length: int = 0
    min_length_message: str = ""
    max_length: int = PHONE_MAX_LENGTH

    def check(self, value: str) -> list[str]:
        errors = []
        if self.min_length and len(value.strip()) < self.min_length:
            errors.append(self.min_length_message)
        if len(value.strip()) > self.max_length:
            errors.append(f"Phone number must be at most {self.max_length} characters long")
            return errors
        if not self.pattern.match(normalize_phone(value)):
            errors.append(self.invalid_message)
        return errors


# Public enquiry and booking forms: require a full number
ENQUIRY_PHONE = PhonePolicy(
    pattern=re.compile(r"^\+?\d{7,15}$"),
    invalid_message="Please enter a valid phone number",
    min_length=10,
    min_length_message="Phone number is required and must be at least 10 characters long",
)

# Everything else: 7-15 digits with an optional leading +
GENERAL_PHONE = PhonePolicy(
    pattern=re.compile(r"^\+?\d{7,15}$"),
    invalid_message="Please enter a valid phone number (numbers only, 7-15 digits)",
)


def age_on(born: date, today: date) -> int:
    """Whole years between ``born`` and ``today``, counting the birthday itself."""
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``, tolerating a trailing ISO time component."""
    return date.fromisoformat(value.strip()[:10])


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    form: SubmittedForm | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors


class FieldRules:
    """
    Applies rules to one raw payload.

    Each rule method reads ``raw[key]``, appends any messages to ``errors`` and,
    when the value is acceptable, stores the cleaned value in ``cleaned`` under
    the same key.
    """

    def __init__(self, raw: Mapping[str, Any]):
        self.raw = raw
        self.errors: list[str] = []
        self.cleaned: dict[str, Any] = {}

    def fail(self, message: str) -> None:
        if message not in self.errors:
            self.errors.append(message)

    def _present(self, key: str) -> bool:
        value = self.raw.get(key)
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        if isinstance(value, list):
            return bool(value)
        return True

    def text(
        self,
        key: str,
        label: str,
        *,
        required: bool = True,
        min_length: int = 1,
        max_length: int = DEFAULT_TEXT_LIMIT,
        message: str | None = None,
        too_short_message: str | None = None,
        too_long_message: str | None = None,
    ) -> str | None:
        """
        Trimmed string with length bounds.

        ``message`` replaces the missing / wrong-type / too-short messages for
        fields that report a single combined requirement.
        """
        value = self.raw.get(key)

        if not self._present(key):
            if required:
                self.fail(message or f"{label} is required")
            return None

        if not isinstance(value, str):
            self.fail(message or f"{label} must be text")
            return None

        value = value.strip()
        ok = True
        if len(value) < min_length:
            self.fail(
                too_short_message
                or message
                or f"{label} must be at least {min_length} characters long"
            )
            ok = False
        if len(value) > max_length:
            self.fail(too_long_message or f"{label} must be less than {max_length} characters")
            ok = False

        if ok:
            self.cleaned[key] = value
            return value
        return None

    def phone(
        self,
        key: str,
        label: str,
        policy: PhonePolicy,
        *,
        required: bool = True,
        message: str | None = None,
        normalized_key: str | None = None,
    ) -> str | None:
        value = self.raw.get(key)

        if not self._present(key) or not isinstance(value, str):
            if required or self._present(key):
                self.fail(message or policy.min_length_message or f"{label} is required")
            return None

        problems = policy.check(value)
        for problem in problems:
            self.fail(problem)
        if problems:
            return None

        self.cleaned[key] = value.strip()
        if normalized_key:
            self.cleaned[normalized_key] = normalize_phone(value)
        return value.strip()

    def email(self, key: str, label: str, *, required: bool = True) -> str | None:
        value = self.raw.get(key)

        if not self._present(key):
            if required:
                self.fail(f"{label} is required")
            return None

        if not isinstance(value, str) or not EMAIL_PATTERN.match(value.strip()):
            self.fail("Please enter a valid email address")
            return None
        if len(value.strip()) > EMAIL_MAX_LENGTH:
            self.fail(f"{label} must be at most {EMAIL_MAX_LENGTH} characters long")
            return None

        self.cleaned[key] = value.strip().lower()
        return self.cleaned[key]

    def choice(
        self,
        key: str,
        label: str,
        options: Iterable[str],
        *,
        required: bool = True,
        message: str | None = None,
    ) -> str | None:
        """One value from ``options``, matched case-insensitively and stored canonically."""
        value = self.raw.get(key)

        if not self._present(key):
            if required:
                self.fail(message or f"{label} is required")
            return None

        lookup = {option.lower(): option for option in options}
        canonical = lookup.get(value.strip().lower()) if isinstance(value, str) else None
        if canonical is None:
            self.fail(message or f"Please select a valid option for {label.lower()}")
            return None

        self.cleaned[key] = canonical
        return canonical

    def yes_no(
        self, key: str, label: str, *, required: bool = True, message: str | None = None
    ) -> str | None:
        return self.choice(key, label, YES_NO, required=required, message=message)

    def multi_select(
        self,
        key: str,
        label: str,
        options: Iterable[str] | None = None,
        *,
        required: bool = True,
        message: str | None = None,
    ) -> list[str]:
        value = self.raw.get(key)

        if not self._present(key):
            if required:
                self.fail(message or f"Please select at least one option for {label.lower()}")
            else:
                self.cleaned[key] = []
            return []

        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            self.fail(message or f"{label} must be a list of options")
            return []

        items = [item.strip() for item in value if item.strip()]
        if options is not None:
            lookup = {option.lower(): option for option in options}
            unknown = [item for item in items if item.lower() not in lookup]
            if unknown:
                self.fail(f"{label} contains an unknown option: {', '.join(unknown)}")
                return []
            items = [lookup[item.lower()] for item in items]

        if required and not items:
            self.fail(message or f"Please select at least one option for {label.lower()}")
            return []

        self.cleaned[key] = items
        return items

    def flag(
        self,
        key: str,
        label: str,
        *,
        must_be_true: bool = False,
        message: str | None = None,
    ) -> bool:
        """Strict boolean. Absent optional flags are stored as False."""
        value = self.raw.get(key)

        if must_be_true:
            if value is not True:
                self.fail(message or f"You must confirm: {label}")
                return False
            self.cleaned[key] = True
            return True

        if value is None:
            self.cleaned[key] = False
            return False
        if not isinstance(value, bool):
            self.fail(message or f"{label} must be true or false")
            return False

        self.cleaned[key] = value
        return value

    def integer(
        self, key: str, label: str, *, minimum: int, maximum: int, message: str | None = None
    ) -> int | None:
        """Whole number within bounds. Booleans are not numbers here."""
        value = self.raw.get(key)

        is_number = isinstance(value, int) and not isinstance(value, bool)
        if not is_number or not minimum <= value <= maximum:
            self.fail(message or f"{label} must be a number between {minimum} and {maximum}")
            return None

        self.cleaned[key] = value
        return value

    def iso_date(
        self, key: str, label: str, *, required: bool = True, message: str | None = None
    ) -> date | None:
        value = self.raw.get(key)

        if not self._present(key):
            if required:
                self.fail(message or f"{label} is required")
            return None

        try:
            parsed = parse_date(value)
        except (TypeError, ValueError, AttributeError):
            self.fail(f"{label} must be a valid date")
            return None

        self.cleaned[key] = parsed
        return parsed

    def details_when_yes(self, answer: str | None, key: str, message: str) -> None:
        """Require the follow-up free text when the yes/no answer is yes."""
        if answer == "yes" and not self.cleaned.get(key):
            self.fail(message)


# ============================================
# Rule sets
# ============================================

RELATIONSHIPS = (
    "Mother",
    "Father",
    "Step-Mother",
    "Step-Father",
    "Guardian",
    "Grandparent",
    "Foster Carer",
    "Other",
)
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")
SESSION_TYPES = ("Full Day", "Morning", "Afternoon")
FUNDING_TYPES = (
    "15 hours universal (3 & 4 year olds)",
    "30 hours extended funding (eligible 3 & 4 year olds)",
    "15 hours for eligible 2-year-olds",
    "15 hours for 9-month-olds (from Sept 2025)",
)
CHANGE_TYPES = (
    "Home Address",
    "Contact Number / Email",
    "Emergency Contact",
    "Medical Information",
    "Allergy / Dietary Needs",
    "Collection Arrangements",
    "Legal Status / Parental Responsibility",
    "Others",
)
CONSENT_FLAGS = {
    "localWalks": "Local walks and outings",
    "photoDisplays": "Photos on nursery displays",
    "photoLearningJournal": "Photos in learning journal",
    "groupPhotos": "Group photos with other children",
    "emergencyMedical": "Emergency medical treatment",
    "sunCream": "Application of sun cream",
    "facePainting": "Face painting",
    "toothbrushing": "Supervised toothbrushing",
    "studentObservations": "Observations by students",
    "petsAnimals": "Contact with pets and animals",
    "firstAidPlasters": "First aid plasters",
}

MIN_APPLICANT_AGE = 16


def _child_details(rules: FieldRules) -> None:
    rules.text("childFullName", "Child's full name", min_length=2, max_length=200)
    rules.iso_date("childDOB", "Child's date of birth")


def _parent_sign_off(rules: FieldRules, name_key: str = "parentName") -> None:
    rules.text(name_key, "Parent/carer name", min_length=2, max_length=200)
    rules.email("parentEmail", "Parent/carer email")
    rules.iso_date("date", "Date")


def registration_rules(rules: FieldRules, _today: date) -> None:
    _child_details(rules)
    rules.text("childNHS", "NHS number", required=False, max_length=50)
    rules.text("childGender", "Gender", required=False, max_length=50)
    rules.text("homeAddress", "Home address", max_length=500)
    rules.text("postcode", "Postcode", max_length=20)
    rules.text("ethnicity", "Ethnicity", required=False, max_length=100)
    rules.text("religion", "Religion", required=False, max_length=100)
    rules.multi_select("firstLanguages", "First languages", required=False)
    rules.text("festivals", "Festivals", required=False)

    rules.text("parent1Name", "Parent/carer 1 name", min_length=2, max_length=200)
    rules.choice("parent1Relationship", "Parent/carer 1 relationship", RELATIONSHIPS)
    rules.email("parent1Email", "Parent/carer 1 email")
    rules.phone("parent1Phone", "Parent/carer 1 phone", GENERAL_PHONE)
    rules.yes_no(
        "parent1ParentalResponsibility",
        "Parental responsibility",
        message="Please specify if parent/carer 1 has parental responsibility",
    )
    rules.text("parent2Name", "Parent/carer 2 name", required=False, max_length=200)
    rules.choice(
        "parent2Relationship", "Parent/carer 2 relationship", RELATIONSHIPS, required=False
    )
    rules.email("parent2Email", "Parent/carer 2 email", required=False)
    rules.phone("parent2Phone", "Parent/carer 2 phone", GENERAL_PHONE, required=False)
    rules.yes_no(
        "parent2ParentalResponsibility",
        "Parental responsibility",
        required=False,
        message="Please specify if parent/carer 2 has parental responsibility",
    )

    rules.text("emergencyContact1", "Emergency contact 1", max_length=500)
    rules.text("emergencyContact2", "Emergency contact 2", max_length=500)
    rules.text("notAuthorised", "People not authorised to collect", required=False)
    rules.text("collectionPassword", "Collection password", required=False, max_length=100)

    rules.text("gpName", "GP name", max_length=200)
    rules.text("gpAddress", "GP address", required=False, max_length=500)
    rules.text("immunisations", "Immunisation status", max_length=200)
    rules.text("allergies", "Allergies", required=False)
    rules.text("medication", "Medication", required=False)
    rules.multi_select("dietaryNeeds", "Dietary needs", required=False)
    send_support = rules.yes_no("sendSupport", "SEND support", required=False)
    rules.text("sendDetails", "SEND details", required=False)
    rules.details_when_yes(send_support, "sendDetails", "Please describe the SEND support needed")

    rules.iso_date("startDate", "Preferred start date")
    rules.multi_select(
        "daysAttending",
        "Days attending",
        WEEKDAYS,
        message="Please select at least one day of attendance",
    )
    rules.choice("sessionType", "Session type", SESSION_TYPES)
    rules.text("fundedHours", "Funded hours", max_length=50)

    rules.flag("emergencyTreatment", "Emergency treatment")
    rules.flag("photoConsent", "Photo consent")
    rules.flag("outingsConsent", "Outings consent")
    rules.flag("sunCreamConsent", "Sun cream consent")
    rules.flag(
        "declarationConfirm",
        "Declaration",
        must_be_true=True,
        message="You must confirm the declaration to submit your application",
    )
    rules.text("parentName", "Parent/carer name", min_length=2, max_length=200)
    rules.iso_date("date", "Date")


def medical_rules(rules: FieldRules, _today: date) -> None:
    _child_details(rules)
    rules.text("homeAddress", "Home address", max_length=500)
    rules.text("postcode", "Postcode", max_length=20)
    rules.text("gpName", "GP name", max_length=200)
    rules.text("gpAddress", "GP address", max_length=500)
    rules.text("healthVisitor", "Health visitor", required=False, max_length=200)

    conditions = rules.yes_no(
        "hasMedicalConditions",
        "Medical conditions",
        message="Please specify if your child has any medical conditions",
    )
    rules.text("medicalConditionsDetails", "Medical conditions details", required=False)
    rules.details_when_yes(
        conditions, "medicalConditionsDetails", "Please give details of the medical conditions"
    )
    allergies = rules.yes_no(
        "hasAllergies", "Allergies", message="Please specify if your child has any allergies"
    )
    rules.text("allergiesDetails", "Allergy details", required=False)
    rules.details_when_yes(allergies, "allergiesDetails", "Please give details of the allergies")
    medication = rules.yes_no(
        "onLongTermMedication",
        "Long-term medication",
        message="Please specify if your child is on long-term medication",
    )
    rules.text("longTermMedicationDetails", "Long-term medication details", required=False)
    rules.details_when_yes(
        medication,
        "longTermMedicationDetails",
        "Please give details of the long-term medication",
    )

    rules.text("medicationName", "Medication name", required=False, max_length=200)
    rules.text("medicationDosage", "Medication dosage", required=False, max_length=200)
    rules.text("medicationFrequency", "Medication frequency", required=False, max_length=200)
    rules.text("medicationStorage", "Medication storage", required=False, max_length=200)
    rules.iso_date("medicationStartDate", "Medication start date", required=False)
    rules.iso_date("medicationEndDate", "Medication end date", required=False)

    rules.flag("medicationAdminConsent", "Consent to administer medication")
    rules.flag("medicationContainerConsent", "Medication container consent")
    rules.flag("emergencyFirstAid", "Emergency first aid")
    rules.flag("emergencyServicesConsent", "Emergency services consent")
    rules.flag("emergencyContactConsent", "Emergency contact consent")
    rules.flag("hospitalAccompanyConsent", "Hospital accompaniment consent")

    _parent_sign_off(rules)


def consent_rules(rules: FieldRules, _today: date) -> None:
    _child_details(rules)
    for key, label in CONSENT_FLAGS.items():
        rules.flag(key, label)
    rules.text("additionalComments", "Additional comments", required=False)
    _parent_sign_off(rules)


def funding_rules(rules: FieldRules, _today: date) -> None:
    _child_details(rules)
    rules.text("homeAddress", "Home address", max_length=500)
    rules.text("postcode", "Postcode", max_length=20)
    rules.text("parentFullName", "Parent/carer full name", min_length=2, max_length=200)
    rules.email("parentEmail", "Parent/carer email")
    ni_number = rules.text("nationalInsuranceNumber", "National Insurance number", max_length=20)
    if ni_number:
        rules.cleaned["nationalInsuranceNumber"] = ni_number.upper()
    rules.text("employmentStatus", "Employment status", max_length=100)
    rules.text("thirtyHourCode", "30-hour eligibility code", required=False, max_length=50)
    rules.multi_select(
        "fundingTypes",
        "Funding types",
        FUNDING_TYPES,
        message="Please select at least one funding type",
    )
    rules.flag(
        "confirmAccuracy",
        "Information is accurate",
        must_be_true=True,
        message="You must confirm the information provided is accurate",
    )
    rules.flag(
        "confirmNotifyChanges",
        "Notify changes",
        must_be_true=True,
        message="You must agree to notify the nursery of any changes",
    )
    rules.flag(
        "confirmCheckEligibility",
        "Eligibility checks",
        must_be_true=True,
        message="You must consent to eligibility checks",
    )
    rules.flag(
        "confirmAdditionalCharges",
        "Additional charges",
        must_be_true=True,
        message="You must acknowledge that additional charges may apply",
    )
    rules.iso_date("date", "Date")


def change_rules(rules: FieldRules, _today: date) -> None:
    _child_details(rules)
    rules.multi_select(
        "changeTypes",
        "Change types",
        CHANGE_TYPES,
        message="Please select at least one type of change",
    )
    rules.text("newInformation", "New information", min_length=2)
    rules.iso_date("effectiveFrom", "Effective from date")
    _parent_sign_off(rules)


ABOUT_ME_TEXT = {
    "preferredName": "Preferred name",
    "siblings": "Siblings",
    "emotionalExpression": "Emotional expression",
    "fearsOrDislikes": "Fears or dislikes",
    "feedsThemselves": "Feeds themselves",
    "preferredFoods": "Preferred foods",
    "foodsToAvoid": "Foods to avoid",
    "usesCutlery": "Uses cutlery",
    "allergiesOrIntolerances": "Allergies or intolerances",
    "takesNaps": "Takes naps",
    "napTime": "Nap time",
    "comfortItem": "Comfort item",
    "sleepRoutine": "Sleep routine",
    "toiletTrained": "Toilet trained",
    "toiletingRoutines": "Toileting routines",
    "favouriteToys": "Favourite toys",
    "favouriteSongs": "Favourite songs",
    "dislikes": "Dislikes",
    "whatMakesHappy": "What makes them happy",
    "culturalNeeds": "Cultural needs",
    "festivalsAndEvents": "Festivals and events",
    "parentalHopes": "Parental hopes",
    "concerns": "Concerns",
}


def about_me_rules(rules: FieldRules, _today: date) -> None:
    _child_details(rules)
    for key, label in ABOUT_ME_TEXT.items():
        rules.text(key, label, required=False)
    rules.multi_select("languagesSpoken", "Languages spoken", required=False)
    rules.multi_select("personality", "Personality", required=False)
    rules.multi_select("toiletUse", "Toilet use", required=False)
    _parent_sign_off(rules)


def job_application_rules(rules: FieldRules, today: date) -> None:
    rules.text("positionApplyingFor", "Position applying for", max_length=200)
    rules.text(
        "fullName",
        "Full name",
        min_length=2,
        max_length=100,
        too_short_message="Full name must be between 2 and 100 characters",
        too_long_message="Full name must be between 2 and 100 characters",
    )

    born = rules.iso_date("dateOfBirth", "Date of birth")
    if born is not None and age_on(born, today) < MIN_APPLICANT_AGE:
        rules.fail(f"Applicant must be at least {MIN_APPLICANT_AGE} years old")

    ni_number = rules.text("nationalInsuranceNumber", "National insurance number", max_length=20)
    if ni_number:
        rules.cleaned["nationalInsuranceNumber"] = ni_number.upper()
    rules.email("emailAddress", "Email address")
    rules.phone("phoneNumber", "Phone number", GENERAL_PHONE, message="Phone number is required")
    rules.text("fullHomeAddress", "Full home address", max_length=500)

    rules.yes_no(
        "rightToWorkUK",
        "Right to work in the UK",
        message="Please specify if you have the right to work in the UK",
    )
    rules.yes_no(
        "currentDBSCertificate",
        "Current DBS certificate",
        message="Please specify if you have a current DBS certificate",
    )
    rules.text("dbsCertificateNumber", "DBS certificate number", required=False, max_length=50)
    convictions = rules.yes_no(
        "criminalConvictions",
        "Criminal convictions",
        message="Please specify if you have any criminal convictions",
    )
    rules.text("criminalConvictionsDetails", "Criminal convictions details", required=False)
    rules.details_when_yes(
        convictions,
        "criminalConvictionsDetails",
        "Please provide details of your criminal convictions",
    )

    rules.text(
        "qualifications",
        "Qualifications",
        max_length=2000,
        too_long_message="Qualifications section must be less than 2000 characters",
    )
    rules.text("relevantTraining", "Relevant training", required=False)
    rules.text(
        "employmentHistory",
        "Employment history",
        max_length=3000,
        too_long_message="Employment history must be less than 3000 characters",
    )
    rules.text("employmentGaps", "Employment gaps", required=False)
    rules.text(
        "references",
        "References",
        max_length=2000,
        too_long_message="References section must be less than 2000 characters",
    )
    rules.text(
        "whyWorkHere",
        "Why work here",
        max_length=1500,
        too_long_message="Why work here section must be less than 1500 characters",
    )

    rules.flag(
        "declaration",
        "Declaration",
        must_be_true=True,
        message="You must confirm the declaration to submit your application",
    )
    rules.iso_date("date", "Date")


def _enquirer(rules: FieldRules) -> None:
    rules.text(
        "fullName",
        "Full name",
        min_length=2,
        max_length=200,
        message="Full name is required and must be at least 2 characters long",
    )
    rules.phone("phoneNumber", "Phone number", ENQUIRY_PHONE, normalized_key="phoneNormalized")


def contact_rules(rules: FieldRules, _today: date) -> None:
    _enquirer(rules)
    rules.text(
        "message",
        "Message",
        min_length=10,
        max_length=1000,
        message="Message is required and must be at least 10 characters long",
        too_long_message="Message must be less than 1000 characters",
    )


def children_details_rules(rules: FieldRules, _today: date) -> None:
    """Shared by availability checks and the waitlist."""
    _enquirer(rules)
    details = rules.text("childrenDetails", "Children details", required=False)
    rules.cleaned["childrenDetails"] = details or ""


VISIT_TIMES = ("9:00 AM", "10:00 AM", "11:00 AM", "2:00 PM", "3:00 PM", "4:00 PM")
MAX_VISITING_CHILD_AGE = 12


def visit_booking_rules(rules: FieldRules, today: date) -> None:
    rules.text(
        "parentName",
        "Parent name",
        min_length=2,
        max_length=200,
        message="Parent name is required and must be at least 2 characters long",
    )
    rules.text(
        "childName",
        "Child name",
        min_length=2,
        max_length=200,
        message="Child name is required and must be at least 2 characters long",
    )
    rules.integer("childAge", "Child age", minimum=0, maximum=MAX_VISITING_CHILD_AGE)
    rules.email("email", "Email")
    rules.phone("phone", "Phone number", ENQUIRY_PHONE)

    visit_date = rules.iso_date("visitDate", "Visit date", message="Visit date is required")
    if visit_date is not None:
        if visit_date < today:
            rules.fail("Visit date cannot be in the past")
        elif visit_date.weekday() >= 5:
            rules.fail("Visits are not available on weekends")

    rules.choice("visitTime", "Visit time", VISIT_TIMES, message="Please select a valid visit time")
    rules.text("message", "Message", required=False, max_length=1000)
    rules.cleaned.setdefault("message", "")


RuleSet = Callable[[FieldRules, date], None]

RULE_SETS: dict[FormType, tuple[RuleSet, type[ValidatedForm]]] = {
    FormType.REGISTRATION: (registration_rules, RegistrationFormData),
    FormType.MEDICAL: (medical_rules, MedicalFormData),
    FormType.CONSENT: (consent_rules, ConsentFormData),
    FormType.FUNDING: (funding_rules, FundingDeclarationData),
    FormType.CHANGE: (change_rules, ChangeOfDetailsData),
    FormType.ABOUT_ME: (about_me_rules, AboutMeData),
    FormType.JOB_APPLICATION: (job_application_rules, JobApplicationData),
    FormType.CONTACT: (contact_rules, ContactFormData),
    FormType.AVAILABILITY: (children_details_rules, AvailabilityFormData),
    FormType.VISIT_BOOKING: (visit_booking_rules, VisitBookingFormData),
    FormType.WAITLIST: (children_details_rules, WaitlistFormData),
}


def validate(
    form_type: FormType,
    raw: Any,
    today: date | None = None,
) -> ValidationResult:
    """
    Validate a raw JSON body for ``form_type``.

    Returns:
        ValidationResult with every error message, and the validated form
        when there are none
    """
    if not isinstance(raw, Mapping):
        return ValidationResult(errors=["Request body must be a JSON object"])

    rule_set, schema = RULE_SETS[form_type]
    rules = FieldRules(raw)
    rule_set(rules, today or date.today())

    if rules.errors:
        return ValidationResult(errors=rules.errors)

    return ValidationResult(form=schema.model_validate(rules.cleaned))
