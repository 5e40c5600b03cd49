import os

import requests

from app import create_app
from errors import ConflictError
from services.registry import get_services

OMDB_API_KEY = os.getenv("OMDB_API_KEY", "")
OMDB_URL = "http://www.omdbapi.com/"

seed_titles = [
    "Wicked: For Good",
    "Regretting You",
    "Black Phone 2",
    "Zootopia 2",
    "Predator: Badlands"
]


def fetch_movie(title):
    data = requests.get(
        OMDB_URL, params={"apikey": OMDB_API_KEY, "t": title, "type": "movie"}, timeout=10
    ).json()
    if not data or data.get("Response") == "False":
        return None
    return data


def to_movie_fields(data):
    """Map an OMDb record onto the movie document shape."""
    try:
        year = int(str(data.get("Year", ""))[:4])
    except ValueError:
        return None
    try:
        rating = float(data.get("imdbRating"))
    except (TypeError, ValueError):
        rating = 0.0
    if year < 1888:
        return None
    return {
        "title": data.get("Title"),
        "year": year,
        "genre": data.get("Genre") or "Unknown",
        "rating": rating,
        "status": "available",
    }


def main():
    app = create_app()
    with app.app_context():
        services = get_services()

        # ------------------------------
        # Seed Employee Account
        # ------------------------------
        admin_username = os.getenv("ADMIN_USERNAME", "admin")
        admin_password = os.getenv("ADMIN_PASSWORD", "Admin123!")
        try:
            services.users.register(admin_username, admin_password, "employee")
            print("Employee user created!")
        except ConflictError:
            print("Employee user already exists")

        # ------------------------------
        # Seed Movies
        # ------------------------------
        existing = {movie.title for movie in services.movies.list_movies()}
        for title in seed_titles:
            data = fetch_movie(title)
            if not data:
                print(f"Skipping '{title}': OMDB returned no results.")
                continue

            fields = to_movie_fields(data)
            if not fields:
                print(f"Skipping '{title}': incomplete OMDB record.")
                continue

            if fields["title"] in existing:
                print(f"Skipping {title} (already in DB)")
                continue

            services.movies.create_movie(fields)
            existing.add(fields["title"])
            print(f"Added movie: {title}")

        print("Seeding complete!")


if __name__ == "__main__":
    main()
