"""
Submission Documents

Renders a validated form into an A4 PDF record: a branded header with the
form title, reference and submission date, one labelled table per section,
and a footer carrying the nursery's contact details on every page.

Rendering is CPU-bound; callers run ``render_document`` in a worker thread.
"""

import io
import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime
from html import escape
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from nursery_api.core.config import settings
from nursery_api.modules.submissions.models import FormType

logger = logging.getLogger(__name__)

BRAND_COLOR = colors.HexColor("#FC4C17")
ACCENT_COLOR = colors.HexColor("#2C97A9")
DARK_GRAY = colors.HexColor("#1f2937")
LIGHT_GRAY = colors.HexColor("#f3f4f6")

NOT_PROVIDED = "Not provided"

Row = tuple[str, Any]
Section = tuple[str, list[Row]]


class RenderError(Exception):
    """Raised when a submission document cannot be produced."""


DOCUMENT_TITLES = {
    FormType.REGISTRATION: "Application & Registration Form",
    FormType.MEDICAL: "Medical Form",
    FormType.CONSENT: "Consent Form",
    FormType.FUNDING: "Funding Declaration Form",
    FormType.CHANGE: "Change of Details Form",
    FormType.ABOUT_ME: "All About Me",
    FormType.JOB_APPLICATION: "Job Application",
    FormType.WAITLIST: "Waitlist Registration",
}


def format_value(value: Any) -> str:
    if value is None or value == "" or value == []:
        return NOT_PROVIDED
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return value.strftime("%d %B %Y, %H:%M")
    if isinstance(value, date):
        return value.strftime("%d %B %Y")
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    if value in ("yes", "no"):
        return value.capitalize()
    return str(value)


def _consent(granted: bool) -> str:
    return "Granted" if granted else "Not granted"


# ============================================
# Section layouts per form type
# ============================================


def _child_section(form: Any) -> Section:
    return ("Child Details", [
        ("Full name", form.child_full_name),
        ("Date of birth", form.child_dob),
    ])


def _registration_sections(form: Any) -> list[Section]:
    child_name, child_rows = _child_section(form)
    return [
        (child_name, child_rows + [
            ("NHS number", form.child_nhs),
            ("Gender", form.child_gender),
            ("Home address", form.home_address),
            ("Postcode", form.postcode),
            ("Ethnicity", form.ethnicity),
            ("Religion", form.religion),
            ("First languages", form.first_languages),
            ("Festivals celebrated", form.festivals),
        ]),
        ("Parent / Carer 1", [
            ("Name", form.parent1_name),
            ("Relationship", form.parent1_relationship),
            ("Email", form.parent1_email),
            ("Phone", form.parent1_phone),
            ("Parental responsibility", form.parent1_parental_responsibility),
        ]),
        ("Parent / Carer 2", [
            ("Name", form.parent2_name),
            ("Relationship", form.parent2_relationship),
            ("Email", form.parent2_email),
            ("Phone", form.parent2_phone),
            ("Parental responsibility", form.parent2_parental_responsibility),
        ]),
        ("Emergency Contacts & Collection", [
            ("Emergency contact 1", form.emergency_contact1),
            ("Emergency contact 2", form.emergency_contact2),
            ("Not authorised to collect", form.not_authorised),
            ("Collection password", "Provided" if form.collection_password else None),
        ]),
        ("Health", [
            ("GP name", form.gp_name),
            ("GP address", form.gp_address),
            ("Immunisations", form.immunisations),
            ("Allergies", form.allergies),
            ("Medication", form.medication),
            ("Dietary needs", form.dietary_needs),
            ("SEND support", form.send_support),
            ("SEND details", form.send_details),
        ]),
        ("Attendance", [
            ("Preferred start date", form.start_date),
            ("Days attending", form.days_attending),
            ("Session type", form.session_type),
            ("Funded hours", form.funded_hours),
        ]),
        ("Consents & Declaration", [
            ("Emergency treatment", _consent(form.emergency_treatment)),
            ("Photographs", _consent(form.photo_consent)),
            ("Outings", _consent(form.outings_consent)),
            ("Sun cream", _consent(form.sun_cream_consent)),
            ("Declaration confirmed", form.declaration_confirm),
            ("Signed by", form.parent_name),
            ("Date", form.signed_date),
        ]),
    ]


def _medical_sections(form: Any) -> list[Section]:
    child_name, child_rows = _child_section(form)
    return [
        (child_name, child_rows + [
            ("Home address", form.home_address),
            ("Postcode", form.postcode),
        ]),
        ("Doctor & Health Visitor", [
            ("GP name", form.gp_name),
            ("GP address", form.gp_address),
            ("Health visitor", form.health_visitor),
        ]),
        ("Medical History", [
            ("Medical conditions", form.has_medical_conditions),
            ("Details", form.medical_conditions_details),
            ("Allergies", form.has_allergies),
            ("Allergy details", form.allergies_details),
            ("Long-term medication", form.on_long_term_medication),
            ("Medication details", form.long_term_medication_details),
        ]),
        ("Medication", [
            ("Name", form.medication_name),
            ("Dosage", form.medication_dosage),
            ("Frequency", form.medication_frequency),
            ("Storage", form.medication_storage),
            ("Start date", form.medication_start_date),
            ("End date", form.medication_end_date),
        ]),
        ("Consents", [
            ("Administer medication", _consent(form.medication_admin_consent)),
            ("Original container", _consent(form.medication_container_consent)),
            ("Emergency first aid", _consent(form.emergency_first_aid)),
            ("Call emergency services", _consent(form.emergency_services_consent)),
            ("Contact emergency contacts", _consent(form.emergency_contact_consent)),
            ("Accompany to hospital", _consent(form.hospital_accompany_consent)),
        ]),
        ("Parent / Carer", [
            ("Name", form.parent_name),
            ("Email", form.parent_email),
            ("Date", form.signed_date),
        ]),
    ]


CONSENT_LABELS = {
    "local_walks": "Local walks and outings",
    "photo_displays": "Photos on nursery displays",
    "photo_learning_journal": "Photos in learning journal",
    "group_photos": "Group photos with other children",
    "emergency_medical": "Emergency medical treatment",
    "sun_cream": "Application of sun cream",
    "face_painting": "Face painting",
    "toothbrushing": "Supervised toothbrushing",
    "student_observations": "Observations by students",
    "pets_animals": "Contact with pets and animals",
    "first_aid_plasters": "First aid plasters",
}


def _consent_sections(form: Any) -> list[Section]:
    return [
        _child_section(form),
        ("Consents", [
            (label, _consent(getattr(form, name))) for name, label in CONSENT_LABELS.items()
        ]),
        ("Additional Comments", [("Comments", form.additional_comments)]),
        ("Parent / Carer", [
            ("Name", form.parent_name),
            ("Email", form.parent_email),
            ("Date", form.signed_date),
        ]),
    ]


def _funding_sections(form: Any) -> list[Section]:
    child_name, child_rows = _child_section(form)
    return [
        (child_name, child_rows + [
            ("Home address", form.home_address),
            ("Postcode", form.postcode),
        ]),
        ("Parent / Carer", [
            ("Full name", form.parent_full_name),
            ("Email", form.parent_email),
            ("National Insurance number", form.national_insurance_number),
            ("Employment status", form.employment_status),
            ("30-hour code", form.thirty_hour_code),
        ]),
        ("Funding Requested", [("Funding types", form.funding_types)]),
        ("Declarations", [
            ("Information is accurate", form.confirm_accuracy),
            ("Will notify changes", form.confirm_notify_changes),
            ("Eligibility checks", form.confirm_check_eligibility),
            ("Additional charges acknowledged", form.confirm_additional_charges),
            ("Date", form.signed_date),
        ]),
    ]


def _change_sections(form: Any) -> list[Section]:
    return [
        _child_section(form),
        ("Changes", [
            ("Type of change", form.change_types),
            ("New information", form.new_information),
            ("Effective from", form.effective_from),
        ]),
        ("Parent / Carer", [
            ("Name", form.parent_name),
            ("Email", form.parent_email),
            ("Date", form.signed_date),
        ]),
    ]


def _about_me_sections(form: Any) -> list[Section]:
    child_name, child_rows = _child_section(form)
    return [
        (child_name, child_rows + [
            ("Preferred name", form.preferred_name),
            ("Languages spoken", form.languages_spoken),
            ("Siblings", form.siblings),
        ]),
        ("Personality", [
            ("Personality", form.personality),
            ("Expresses emotions", form.emotional_expression),
            ("Fears or dislikes", form.fears_or_dislikes),
        ]),
        ("Eating", [
            ("Feeds themselves", form.feeds_themselves),
            ("Preferred foods", form.preferred_foods),
            ("Foods to avoid", form.foods_to_avoid),
            ("Uses cutlery", form.uses_cutlery),
            ("Allergies or intolerances", form.allergies_or_intolerances),
        ]),
        ("Sleeping", [
            ("Takes naps", form.takes_naps),
            ("Nap time", form.nap_time),
            ("Comfort item", form.comfort_item),
            ("Sleep routine", form.sleep_routine),
        ]),
        ("Toileting", [
            ("Toilet trained", form.toilet_trained),
            ("Uses", form.toilet_use),
            ("Routines", form.toileting_routines),
        ]),
        ("Play & Happiness", [
            ("Favourite toys", form.favourite_toys),
            ("Favourite songs", form.favourite_songs),
            ("Dislikes", form.dislikes),
            ("What makes them happy", form.what_makes_happy),
            ("Cultural needs", form.cultural_needs),
            ("Festivals and events", form.festivals_and_events),
        ]),
        ("From the Family", [
            ("Hopes for nursery", form.parental_hopes),
            ("Concerns", form.concerns),
            ("Completed by", form.parent_name),
            ("Email", form.parent_email),
            ("Date", form.signed_date),
        ]),
    ]


def _job_application_sections(form: Any) -> list[Section]:
    return [
        ("Position", [("Applying for", form.position_applying_for)]),
        ("Personal Information", [
            ("Full name", form.full_name),
            ("Date of birth", form.date_of_birth),
            ("National Insurance number", form.national_insurance_number),
            ("Email", form.email_address),
            ("Phone", form.phone_number),
            ("Home address", form.full_home_address),
        ]),
        ("Work Authorisation & Background", [
            ("Right to work in the UK", form.right_to_work_uk),
            ("Current DBS certificate", form.current_dbs_certificate),
            ("DBS certificate number", form.dbs_certificate_number),
            ("Criminal convictions", form.criminal_convictions),
            ("Conviction details", form.criminal_convictions_details),
        ]),
        ("Qualifications & Experience", [
            ("Qualifications", form.qualifications),
            ("Relevant training", form.relevant_training),
            ("Employment history", form.employment_history),
            ("Employment gaps", form.employment_gaps),
            ("References", form.references),
            ("Why work here", form.why_work_here),
        ]),
        ("Declaration", [
            ("Declaration confirmed", form.declaration),
            ("Date", form.application_date),
        ]),
    ]


def _waitlist_sections(form: Any) -> list[Section]:
    return [
        ("Family", [
            ("Full name", form.full_name),
            ("Phone number", form.phone_number),
            ("Children", form.children_details),
        ]),
    ]


SECTION_BUILDERS = {
    FormType.REGISTRATION: _registration_sections,
    FormType.MEDICAL: _medical_sections,
    FormType.CONSENT: _consent_sections,
    FormType.FUNDING: _funding_sections,
    FormType.CHANGE: _change_sections,
    FormType.ABOUT_ME: _about_me_sections,
    FormType.JOB_APPLICATION: _job_application_sections,
    FormType.WAITLIST: _waitlist_sections,
}


def has_document(form_type: FormType) -> bool:
    return form_type in SECTION_BUILDERS


# ============================================
# Rendering
# ============================================


class SubmissionDocument:
    """Builds the PDF for one submission."""

    def __init__(
        self,
        form_type: FormType,
        form: Any,
        reference: str,
        submitted_at: datetime | None = None,
        extra_rows: Iterable[Row] = (),
    ):
        self.form_type = form_type
        self.form = form
        self.reference = reference
        self.submitted_at = submitted_at or datetime.now(UTC)
        self.extra_rows = list(extra_rows)

        self.page_width, self.page_height = A4
        self.margin = 18 * mm
        self.content_width = self.page_width - (2 * self.margin)

        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "SubmissionTitle",
            parent=styles["Heading1"],
            fontSize=20,
            textColor=BRAND_COLOR,
            spaceAfter=4,
        )
        self.meta_style = ParagraphStyle(
            "SubmissionMeta",
            parent=styles["Normal"],
            fontSize=9,
            textColor=DARK_GRAY,
        )
        self.heading_style = ParagraphStyle(
            "SectionHeading",
            parent=styles["Heading2"],
            fontSize=12,
            textColor=ACCENT_COLOR,
            spaceBefore=12,
            spaceAfter=6,
        )
        self.cell_style = ParagraphStyle(
            "Cell",
            parent=styles["Normal"],
            fontSize=9,
            leading=12,
            textColor=DARK_GRAY,
        )

    def _paragraph(self, value: Any, style: ParagraphStyle) -> Paragraph:
        text = escape(format_value(value)).replace("\n", "<br/>")
        return Paragraph(text, style)

    def _section_table(self, rows: list[Row]) -> Table:
        data = [
            [self._paragraph(label, self.cell_style), self._paragraph(value, self.cell_style)]
            for label, value in rows
        ]
        table = Table(data, colWidths=[0.35 * self.content_width, 0.65 * self.content_width])
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (0, -1), LIGHT_GRAY),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#e5e7eb")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                    ("TOPPADDING", (0, 0), (-1, -1), 5),
                ]
            )
        )
        return table

    def _draw_footer(self, canvas_obj, doc) -> None:
        canvas_obj.saveState()
        canvas_obj.setFont("Helvetica", 8)
        canvas_obj.setFillColor(colors.grey)
        canvas_obj.drawString(
            self.margin,
            self.margin / 2 + 10,
            f"{settings.nursery_name} | {settings.nursery_address}",
        )
        canvas_obj.drawString(
            self.margin,
            self.margin / 2,
            f"Tel: {settings.nursery_landline} | Mobile: {settings.nursery_mobile} | "
            f"{settings.nursery_email} | {settings.nursery_website}",
        )
        canvas_obj.drawRightString(
            self.page_width - self.margin,
            self.margin / 2,
            f"{self.reference} | Page {canvas_obj.getPageNumber()}",
        )
        canvas_obj.restoreState()

    def build(self) -> bytes:
        title = DOCUMENT_TITLES[self.form_type]
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=self.margin,
            leftMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=self.margin + 10 * mm,
            title=f"{title} - {self.reference}",
            author=settings.nursery_name,
        )

        story: list = [
            Paragraph(escape(title), self.title_style),
            Paragraph(
                f"Reference: <b>{escape(self.reference)}</b> &nbsp;&nbsp; "
                f"Submitted: {escape(format_value(self.submitted_at))}",
                self.meta_style,
            ),
            Spacer(1, 4 * mm),
        ]

        sections = SECTION_BUILDERS[self.form_type](self.form)
        if self.extra_rows:
            sections.append(("Status", self.extra_rows))

        for heading, rows in sections:
            story.append(Paragraph(escape(heading), self.heading_style))
            story.append(self._section_table(rows))

        doc.build(story, onFirstPage=self._draw_footer, onLaterPages=self._draw_footer)
        return buffer.getvalue()


def render_document(
    form_type: FormType,
    form: Any,
    reference: str,
    submitted_at: datetime | None = None,
    extra_rows: Iterable[Row] = (),
) -> bytes:
    """
    Render the PDF record for a submission.

    Raises:
        RenderError: If the form type has no layout or rendering fails
    """
    if not has_document(form_type):
        raise RenderError(f"No document layout for form type {form_type.value}")

    try:
        pdf_bytes = SubmissionDocument(form_type, form, reference, submitted_at, extra_rows).build()
    except Exception as e:
        raise RenderError(f"Failed to render {form_type.value} document {reference}: {e}") from e

    logger.info(f"Rendered {form_type.value} document {reference} ({len(pdf_bytes)} bytes)")
    return pdf_bytes
