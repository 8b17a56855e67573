"""HTML for the index page.

Every value coming from the request or from BGPView goes through
``html.escape`` before it is placed in the markup.
"""

from html import escape
from typing import Iterable, List
from urllib.parse import urlsplit

from ipv6request.models import ASNDetails, PageData

_STYLE = """
body { font-family: sans-serif; margin: 20px; }
.container { max-width: 600px; margin: auto; padding: 20px; border: 1px solid #ccc; border-radius: 8px; }
h1 { text-align: center; color: #333; }
form { display: flex; flex-direction: column; gap: 10px; margin-bottom: 20px; }
input[type="text"] { padding: 8px; border: 1px solid #ddd; border-radius: 4px; }
input[type="submit"] { padding: 10px 15px; background-color: #007bff; color: white; border: none; border-radius: 4px; }
.error { color: red; font-weight: bold; margin-top: 10px; }
.info { color: #555; margin-top: 10px; }
.auto-detected { background-color: #e7f3ff; border: 1px solid #b3d9ff; padding: 15px; border-radius: 5px; margin-bottom: 20px; }
.detail-item { background: white; padding: 12px; border-left: 4px solid #007bff; margin: 8px 0; }
.detail-label { font-weight: bold; color: #495057; font-size: 0.9em; }
.message-box { background-color: #f9f9f9; border: 1px solid #eee; padding: 15px; border-radius: 5px; white-space: pre-wrap; line-height: 1.6; }
ul { list-style-type: none; padding: 0; }
"""


def _detail(label: str, value: str) -> str:
    if not value:
        return ""
    return (
        '<div class="detail-item">'
        f'<div class="detail-label">{escape(label)}</div>'
        f'<div class="detail-value">{escape(value)}</div>'
        "</div>"
    )


def _detail_list(label: str, values: Iterable[str], *, mailto: bool = False) -> str:
    values = list(values)
    if not values:
        return ""
    if mailto:
        items = "".join(
            f'<li><a href="mailto:{escape(v)}">{escape(v)}</a></li>' for v in values
        )
    else:
        items = "".join(f"<li>{escape(v)}</li>" for v in values)
    return (
        '<div class="detail-item">'
        f'<div class="detail-label">{escape(label)}</div>'
        f"<ul>{items}</ul>"
        "</div>"
    )


def _render_website(website: str) -> str:
    # only http(s) URLs become links; anything else is shown as text
    site = escape(website)
    if urlsplit(website.strip()).scheme.lower() in ("http", "https"):
        value = f'<a href="{site}" target="_blank" rel="noopener">{site}</a>'
    else:
        value = f'<div class="detail-value">{site}</div>'
    return (
        '<div class="detail-item"><div class="detail-label">Website</div>'
        f"{value}</div>"
    )


def _render_details(details: ASNDetails) -> str:
    parts: List[str] = [
        "<details><summary>View detailed AS organization information</summary>",
        _detail("ASN", details.asn),
        _detail("Organization Name", details.name),
        _detail("Description", details.description_short),
        _detail("Country", details.country_code),
    ]
    if details.website:
        parts.append(_render_website(details.website))
    parts += [
        _detail("Traffic Ratio", details.traffic_ratio),
        _detail("Regional Internet Registry", details.rir_allocation),
        _detail("IANA Assignment", details.iana_assignment),
        _detail("WHOIS Server", details.whois_server),
        _detail_list("Address", details.owner_address),
        _detail_list("Email Contacts", details.email_contacts, mailto=True),
        _detail_list("Abuse Contacts", details.abuse_contacts, mailto=True),
        _detail("Last Updated", details.date_updated),
        "</details>",
    ]
    return "".join(parts)


def _render_connection(page: PageData) -> str:
    if page.auto_detected:
        return (
            '<div class="auto-detected"><h3>Auto-detected Information</h3>'
            f"<p><strong>Your IP:</strong> {escape(page.source_ip)}</p>"
            f"<p><strong>ASN:</strong> {escape(page.detected_asn)} "
            f"({escape(page.asn_name)})</p>"
            '<p class="info">We have detected your ISP\'s ASN from your IP '
            "address. You can use it or enter a different ASN below.</p></div>"
        )
    if page.source_ip:
        return (
            '<div class="auto-detected"><h3>Your Connection</h3>'
            f"<p><strong>Your IP:</strong> {escape(page.source_ip)}</p>"
            '<p class="info">Unable to detect the ASN for your IP. Please enter '
            "an ASN below.</p></div>"
        )
    return ""


def _render_results(page: PageData) -> str:
    if page.error:
        return f'<p class="error">Error: {escape(page.error)}</p>'
    if not page.message:
        return ""

    parts = [f"<h2>Results for ASN {escape(page.asn)}:</h2>"]
    if page.asn_details is not None:
        parts.append(_render_details(page.asn_details))
    if page.prefixes:
        items = "".join(f"<li>{escape(p)}</li>" for p in page.prefixes)
        parts.append(f"<h3>IPv6 Prefixes</h3><ul>{items}</ul>")
    else:
        parts.append(
            f'<p class="info">No IPv6 prefixes registered for ASN {escape(page.asn)}.</p>'
        )
    parts.append(
        "<h3>IPv6 Request Message</h3>"
        f'<div class="message-box">{escape(page.message)}</div>'
    )
    return "".join(parts)


def render_index(page: PageData) -> str:
    hint = " or use auto-detected" if page.auto_detected else ""
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        "<title>Does your provider support IPv6?</title>"
        f"<style>{_STYLE}</style></head><body><div class=\"container\">"
        "<h1>Does your provider support IPv6?</h1>"
        f"{_render_connection(page)}"
        '<form method="POST" action="/">'
        f'<label for="asn">Enter ASN (e.g., 19625){hint}:</label>'
        f'<input type="text" id="asn" name="asn" value="{escape(page.asn)}" required>'
        '<input type="submit" value="Lookup IPv6 Prefixes">'
        "</form>"
        f"{_render_results(page)}"
        "</div></body></html>"
    )
