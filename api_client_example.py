#!/usr/bin/env python3
"""
Example client for the product code REST API.
"""
import requests


class ProductCodeClient:
    """Client for the product code REST API."""

    def __init__(self, base_url: str = "http://localhost:8000/api"):
        self.base_url = base_url
        self.session = requests.Session()

    def health_check(self):
        """Check API health."""
        response = self.session.get(f"{self.base_url}/health/")
        return response.json()

    def list_codes(self):
        """List every product code."""
        response = self.session.get(f"{self.base_url}/codes/")
        response.raise_for_status()
        return response.json()

    def save_code(self, code: str, discount_code: str, description: str, prior_code: str = None):
        """Insert or update a product code."""
        data = {
            "code": code,
            "discount_code": discount_code,
            "description": description,
        }
        if prior_code is not None:
            data["prior_code"] = prior_code
        response = self.session.put(f"{self.base_url}/codes/", json=data)
        response.raise_for_status()
        return response.json()


def print_codes(client: ProductCodeClient):
    listing = client.list_codes()
    for code in listing['codes']:
        print(f"   {code['code']} ({code['discount_code']}): {code['description']}")
    print(f"   {listing['count']} code(s)")


def main():
    """Demonstrate the REST API client."""
    print("=== Product Code REST API Client Demo ===\n")

    client = ProductCodeClient()

    try:
        print("1. Health check:")
        health = client.health_check()
        print(f"   Status: {health['status']}")
        print(f"   Version: {health['version']}")

        print("\n2. Save MO / Movies:")
        result = client.save_code("MO", "N", "Movies")
        print(f"   Action: {result['action']}")
        print_codes(client)

        print("\n3. Rename MO to MV:")
        result = client.save_code("MV", "N", "Movies", prior_code="MO")
        print(f"   Action: {result['action']}")
        print_codes(client)

        print("\n=== Demo completed successfully! ===")

    except requests.exceptions.ConnectionError:
        print("Error: Could not connect to the API server.")
        print("Make sure the Django server is running with: python manage.py runserver")

    except requests.exceptions.HTTPError as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
