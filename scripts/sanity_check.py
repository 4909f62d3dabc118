"""Simple sanity check script that drives one form session end to end."""

from __future__ import annotations

import httpx

API_URL = "http://localhost:8000"


def run_sample(client: httpx.Client, values: dict[str, str]) -> None:
    """Fill a fresh form, submit it and dump the generated variants."""
    response = client.post(f"{API_URL}/v1/form")
    response.raise_for_status()
    session_id = response.json()["session_id"]

    for name, value in values.items():
        client.put(f"{API_URL}/v1/form/{session_id}/fields/{name}", json={"value": value}).raise_for_status()

    response = client.post(f"{API_URL}/v1/form/{session_id}/submit")
    response.raise_for_status()
    data = response.json()
    print(f"Email type: {values['emailType']} | Tone: {values['tone']}")
    if data["notice"]:
        print(f"Notice: {data['notice']['message']}")
    for variant, text in data["results"].items():
        print(f"[{variant}] {text}")
    print("-" * 60)

    client.delete(f"{API_URL}/v1/form/{session_id}")


def main() -> None:
    """Submit a couple of canned forms."""
    scenarios = [
        {"emailType": "Follow-up", "context": "Met Dana at the expo about the analytics pilot.", "tone": "Friendly"},
        {"emailType": "Inquiry", "context": "Ask the vendor about volume pricing.", "tone": "Professional", "details": "Need a reply by Friday."},
        {"emailType": "Marketing", "context": "", "tone": "Casual"},
    ]

    # The webhook has no timeout of its own, so give it room here.
    with httpx.Client(timeout=300.0) as client:
        for values in scenarios:
            run_sample(client, values)


if __name__ == "__main__":
    main()
