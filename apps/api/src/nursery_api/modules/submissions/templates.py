"""
Notification Templates

HTML and plain-text bodies for the two notifications every submission
produces: one for the nursery staff inbox and one for the person who
submitted the form.
"""

from html import escape

from nursery_api.core.config import settings

STYLES = """
            body { font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }
            .container { max-width: 600px; margin: 0 auto; padding: 40px 20px; }
            .header { background-color: #FC4C17; color: white; padding: 20px 24px; border-radius: 8px 8px 0 0; }
            .header h1 { margin: 0; font-size: 22px; }
            .alert { background-color: #fef3c7; border: 1px solid #f59e0b; padding: 16px; border-radius: 8px; margin: 16px 0; }
            .reference { background-color: #eff6ff; border: 1px solid #bfdbfe; padding: 16px; border-radius: 8px; margin: 16px 0; }
            .reference strong { font-size: 18px; letter-spacing: 1px; }
            .info-table { width: 100%; border-collapse: collapse; margin: 16px 0; }
            .info-table td { padding: 8px; border-bottom: 1px solid #e5e7eb; vertical-align: top; }
            .info-table td.label { font-weight: 600; width: 40%; color: #374151; }
            .steps { background-color: #f9fafb; border: 1px solid #e5e7eb; padding: 16px; border-radius: 8px; margin: 16px 0; }
            .steps ul { margin: 8px 0 0 0; padding-left: 20px; }
            .reminder { background-color: #d1fae5; border: 1px solid #22c55e; padding: 16px; border-radius: 8px; margin: 16px 0; }
            .pdf-notice { color: #2C97A9; font-weight: 600; }
            .footer { margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }
"""


def _footer_html() -> str:
    return f"""
            <div class="footer">
                <p><strong>{escape(settings.nursery_name)}</strong></p>
                <p>{escape(settings.nursery_address)}</p>
                <p>Tel: {escape(settings.nursery_landline)} | Mobile: {escape(settings.nursery_mobile)}</p>
                <p>{escape(settings.nursery_email)} | {escape(settings.nursery_website)}</p>
            </div>"""


def _footer_text() -> str:
    return (
        f"{settings.nursery_name}\n"
        f"{settings.nursery_address}\n"
        f"Tel: {settings.nursery_landline} | Mobile: {settings.nursery_mobile}\n"
        f"{settings.nursery_email} | {settings.nursery_website}"
    )


def _page(title: str, body: str) -> str:
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>{escape(title)}</title>
        <style>{STYLES}        </style>
    </head>
    <body>
        <div class="container">{body}{_footer_html()}
        </div>
    </body>
    </html>
    """


def admin_email(
    form_label: str,
    reference: str,
    primary_name: str,
    submitted_at: str,
    additional_info: list[tuple[str, str]] | None = None,
    alert_message: str | None = None,
    has_attachment: bool = True,
) -> tuple[str, str]:
    """
    Build the staff notification for a new submission.

    Returns:
        (html, text) bodies
    """
    additional_info = additional_info or []
    safe_label = escape(form_label)

    rows = [("Name", primary_name), ("Submitted", submitted_at), *additional_info]
    rows_html = "".join(
        f'<tr><td class="label">{escape(label)}</td><td>{escape(value)}</td></tr>'
        for label, value in rows
    )
    alert_html = (
        f'<div class="alert"><strong>{escape(alert_message)}</strong></div>' if alert_message else ""
    )
    attachment_html = (
        '<p class="pdf-notice">The complete form is attached as a PDF.</p>' if has_attachment else ""
    )

    body = f"""
            <div class="header"><h1>New {safe_label}</h1></div>
            {alert_html}
            <div class="reference">
                <p>Reference number</p>
                <strong>{escape(reference)}</strong>
            </div>
            <table class="info-table">{rows_html}</table>
            {attachment_html}"""
    html = _page(f"New {form_label}", body)

    lines = [f"NEW {form_label.upper()}", ""]
    if alert_message:
        lines += [alert_message, ""]
    lines += [f"Reference: {reference}"]
    lines += [f"{label}: {value}" for label, value in rows]
    if has_attachment:
        lines += ["", "The complete form is attached as a PDF."]
    lines += ["", _footer_text()]
    return html, "\n".join(lines)


def submitter_email(
    recipient_name: str,
    form_label: str,
    reference: str,
    subject_name: str,
    next_steps: list[str] | None = None,
    custom_message: str | None = None,
    reminder: str | None = None,
    has_attachment: bool = True,
) -> tuple[str, str]:
    """
    Build the confirmation sent back to whoever submitted the form.

    Returns:
        (html, text) bodies
    """
    next_steps = next_steps or []
    message = custom_message or (
        f"Thank you for submitting the {form_label.lower()} for {subject_name}. "
        "We have received your submission and it is now being processed."
    )

    steps_html = ""
    if next_steps:
        items = "".join(f"<li>{escape(step)}</li>" for step in next_steps)
        steps_html = f'<div class="steps"><p><strong>What Happens Next</strong></p><ul>{items}</ul></div>'
    reminder_html = f'<div class="reminder">{escape(reminder)}</div>' if reminder else ""
    attachment_html = (
        '<p class="pdf-notice">A copy of your submission is attached as a PDF for your records.</p>'
        if has_attachment
        else ""
    )

    body = f"""
            <div class="header"><h1>Thank You</h1></div>
            <p>Dear {escape(recipient_name)},</p>
            <p>{escape(message)}</p>
            <div class="reference">
                <p>Your reference number</p>
                <strong>{escape(reference)}</strong>
            </div>
            {steps_html}
            {reminder_html}
            {attachment_html}
            <p>If you have any questions, please contact us quoting your reference number.</p>"""
    html = _page("Thank You", body)

    lines = ["THANK YOU", "", f"Dear {recipient_name},", "", message, "", f"Reference: {reference}"]
    if next_steps:
        lines += ["", "WHAT HAPPENS NEXT"]
        lines += [f"- {step}" for step in next_steps]
    if reminder:
        lines += ["", reminder]
    if has_attachment:
        lines += ["", "A copy of your submission is attached as a PDF for your records."]
    lines += [
        "",
        "If you have any questions, please contact us quoting your reference number.",
        "",
        _footer_text(),
    ]
    return html, "\n".join(lines)
