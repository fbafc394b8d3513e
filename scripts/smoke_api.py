"""
Smoke test for the API endpoints.
Run this while the server is running in a separate terminal.
"""
import sys
import requests

BASE_URL = "http://localhost:8000/api"


def check_endpoint(name, url, params=None, expected_status=200):
    """Call an endpoint and print a summary of the response."""
    print(f"\n{'='*60}")
    print(f"Testing: {name}")
    print(f"URL: {url}")
    if params:
        print(f"Params: {params}")
    print("-" * 60)
    
    try:
        r = requests.get(url, params=params, timeout=30)
    except requests.RequestException as e:
        print(f"❌ Exception: {e}")
        return None
    
    if r.status_code != expected_status:
        print(f"❌ Error {r.status_code}: {r.text[:200]}")
        return None
    
    data = r.json()
    if isinstance(data, dict):
        print(f"✅ Success! Keys: {list(data.keys())}")
    elif isinstance(data, list):
        print(f"✅ Success! {len(data)} items, first: {data[0] if data else None}")
    else:
        print(f"✅ Success! Response: {str(data)[:200]}")
    return data


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else BASE_URL
    
    print("🧪 Testing COVID Testing Analytics API")
    print("=" * 60)
    
    check_endpoint("Health", f"{base_url}/health")
    departments = check_endpoint("Departments", f"{base_url}/departments") or []
    check_endpoint("Age categories", f"{base_url}/age_categories")
    days = check_endpoint("Days", f"{base_url}/days") or {}
    
    first_day = days.get("from")
    last_day = days.get("to")
    if first_day and last_day and departments:
        check_endpoint("Raw data", f"{base_url}/data",
                       {"from": last_day, "to": last_day, "departments": departments[:2]})
        check_endpoint("National reports", f"{base_url}/national",
                       {"from": first_day, "to": last_day})
        check_endpoint("Department resume", f"{base_url}/department",
                       {"department": departments[0]})
        check_endpoint("Daily top 5", f"{base_url}/daily_top5", {"day": last_day})
    else:
        print("\n⚠️ No data imported yet, call /import first")
    
    check_endpoint("Missing parameter", f"{base_url}/national", expected_status=400)
    
    print("\n" + "=" * 60)
    print("🏁 Testing Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
