"""Advocacy text a customer can send to their provider."""

from typing import Sequence

ADOPTION_TRENDS_URL = "https://stats.ipv6.army/?page=Historical%20Trends"

RIR_FIRST_REQUEST_LINKS = (
    ("ARIN", "https://www.arin.net/resources/guide/ipv6/first_request/"),
    ("RIPE NCC", "https://www.ripe.net/manage-ips-and-asns/ipv6/request-ipv6/"),
    ("APNIC", "https://www.apnic.net/community/ipv6/get-ipv6/"),
    (
        "AFRINIC",
        "https://afrinic.net/support/resource-members/"
        "how-can-i-request-for-an-ipv6-prefix?lang=en",
    ),
    ("LACNIC", "https://www.lacnic.net/1016/2/lacnic/get-ip-addresses_asns"),
)

_INTRO = (
    "I am a current customer of your internet service. IPv6 now results in "
    "nearly 50% of the global internet traffic (see current adoption trends: "
    f"{ADOPTION_TRENDS_URL}), over 80% of mobile traffic, and is available on "
    "all major content providers.\n\n"
    "GROWTH EVIDENCE:\n"
    "The growth trend is clear - IPv6 adoption has been steadily increasing "
    "over the past 5 years as shown in the Global IPv6 Adoption Timeline. You "
    "can view the historical trends and adoption graphs here:\n"
    f"{ADOPTION_TRENDS_URL}\n\n"
    "Major content providers and ISPs worldwide have implemented IPv6 to "
    "future-proof their networks and meet growing demand."
)


def generate_request_message(prefixes: Sequence[str]) -> str:
    if prefixes:
        organization = (
            f"I see that you have {', '.join(prefixes)} registered to your "
            "organization."
        )
        request = (
            "Because IPv4 is a legacy protocol with severely limited resources "
            "available and IPv6 is the current Internet protocol as defined by "
            "the IETF, I respectfully request IPv6 support for my current "
            "service offering. This would ensure compatibility with the modern "
            "Internet infrastructure and provide better connectivity for your "
            "customers."
        )
    else:
        organization = (
            "You currently have no IPv6 associated with your ASN. This "
            "represents a significant opportunity to modernize your network "
            "infrastructure."
        )
        links = "\n".join(f"- {name}: {url}" for name, url in RIR_FIRST_REQUEST_LINKS)
        request = (
            "As IPv4 address space becomes increasingly scarce and expensive, "
            "implementing IPv6 is essential for future growth and "
            "compatibility. I respectfully request that you prioritize IPv6 "
            "deployment for your network and customer services.\n\n"
            "To get started with IPv6, you can request address space from your "
            f"Regional Internet Registry:\n{links}"
        )

    return (
        f"{_INTRO}\n\n"
        f"YOUR ORGANIZATION:\n{organization}\n\n"
        f"REQUEST:\n{request}"
    )
