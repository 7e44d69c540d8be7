"""Shared API constants."""

# Account roles; a role is fixed at signup.
ROLE_CONSUMER = "consumer"
ROLE_PROVIDER = "provider"
USER_ROLES = (ROLE_CONSUMER, ROLE_PROVIDER)

MIN_RATING = 1
MAX_RATING = 5

# Upper bound for a single page of provider reviews
MAX_REVIEW_PAGE_SIZE = 50

# Reference data inserted by the initial migration
DEFAULT_SERVICE_CATEGORIES = (
    ("Plumbing", "Pipe fitting, leak repair, bathroom and kitchen fixtures"),
    ("Electrical", "Wiring, switchboards, appliance installation and repair"),
    ("Carpentry", "Furniture repair, doors, windows and custom woodwork"),
    ("Painting", "Interior and exterior wall painting and touch-ups"),
    ("Cleaning", "Home and office deep cleaning"),
    ("AC Repair", "Air conditioner servicing, gas refill and installation"),
    ("Pest Control", "Termite, cockroach and rodent treatment"),
)
