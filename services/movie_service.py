import logging

from database import to_object_id
from errors import NotFoundError
from models import Movie

logger = logging.getLogger(__name__)


class MovieService:
    def __init__(self, database):
        self.collection = database["movies"]

    def list_movies(self):
        return [Movie.from_document(doc) for doc in self.collection.find()]

    def get_movie(self, movie_id):
        doc = self.collection.find_one({"_id": to_object_id(movie_id, "movie ID")})
        if not doc:
            raise NotFoundError("Movie not found")
        return Movie.from_document(doc)

    def create_movie(self, fields):
        # fields are validated by the caller
        result = self.collection.insert_one(dict(fields))
        logger.info("Created movie %s", result.inserted_id)
        return str(result.inserted_id)

    def update_movie(self, movie_id, fields):
        result = self.collection.update_one(
            {"_id": to_object_id(movie_id, "movie ID")}, {"$set": dict(fields)}
        )
        if result.matched_count == 0:
            raise NotFoundError("Movie not found")

    def delete_movie(self, movie_id):
        result = self.collection.delete_one({"_id": to_object_id(movie_id, "movie ID")})
        if result.deleted_count == 0:
            raise NotFoundError("Movie not found")
        logger.info("Deleted movie %s", movie_id)

    def attach_poster(self, movie_id, poster_path):
        result = self.collection.update_one(
            {"_id": to_object_id(movie_id, "movie ID")}, {"$set": {"posterPath": poster_path}}
        )
        if result.matched_count == 0:
            raise NotFoundError("Movie not found")
