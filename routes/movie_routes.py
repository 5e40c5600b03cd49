from functools import wraps

from flask import Blueprint, current_app, jsonify

from auth import auth_required
from database import to_object_id
from routes.common import load_payload, store_upload
from schemas import movie_schema
from services.registry import get_services

movie_bp = Blueprint("movies", __name__, url_prefix="/api/movies")


def read_access(fn):
    # reads are public unless the deployment asks for a token; public reads
    # never look at the Authorization header
    protected = auth_required()(fn)

    @wraps(fn)
    def wrapper(*args, **kwargs):
        if current_app.config.get("MOVIES_READ_REQUIRES_AUTH"):
            return protected(*args, **kwargs)
        return fn(*args, identity=None, **kwargs)

    return wrapper


@movie_bp.route("", methods=["GET"])
@read_access
def list_movies(identity):
    """List all movies.
    ---
    get:
      tags: [Movies]
      responses:
        200:
          description: Array of movies
    """
    movies = get_services().movies.list_movies()
    return jsonify([movie.to_dict() for movie in movies])


@movie_bp.route("/<movie_id>", methods=["GET"])
@read_access
def get_movie(movie_id, identity):
    """Fetch one movie.
    ---
    get:
      tags: [Movies]
      parameters:
        - {in: path, name: movie_id, required: true, schema: {type: string}}
      responses:
        200:
          description: The movie
        400:
          description: Malformed movie id
        404:
          description: Movie not found
    """
    movie = get_services().movies.get_movie(movie_id)
    return jsonify(movie.to_dict())


@movie_bp.route("", methods=["POST"])
@auth_required()
def create_movie(identity):
    """Create a movie.
    ---
    post:
      tags: [Movies]
      security:
        - bearerAuth: []
      requestBody:
        required: true
        content:
          application/json:
            schema: MovieSchema
      responses:
        201:
          description: Movie created, returns insertedId
        400:
          description: Invalid input
    """
    payload = load_payload(movie_schema)
    inserted_id = get_services().movies.create_movie(payload)
    return jsonify({"insertedId": inserted_id}), 201


@movie_bp.route("/<movie_id>", methods=["PUT"])
@auth_required()
def update_movie(movie_id, identity):
    """Replace a movie's fields.
    ---
    put:
      tags: [Movies]
      security:
        - bearerAuth: []
      parameters:
        - {in: path, name: movie_id, required: true, schema: {type: string}}
      requestBody:
        required: true
        content:
          application/json:
            schema: MovieSchema
      responses:
        200:
          description: Movie updated
        400:
          description: Invalid input or malformed id
        404:
          description: Movie not found
    """
    to_object_id(movie_id, "movie ID")
    payload = load_payload(movie_schema)
    get_services().movies.update_movie(movie_id, payload)
    return jsonify({"message": "Movie updated successfully"})


@movie_bp.route("/<movie_id>", methods=["DELETE"])
@auth_required()
def delete_movie(movie_id, identity):
    """Delete a movie.
    ---
    delete:
      tags: [Movies]
      security:
        - bearerAuth: []
      parameters:
        - {in: path, name: movie_id, required: true, schema: {type: string}}
      responses:
        200:
          description: Movie deleted
        404:
          description: Movie not found
    """
    get_services().movies.delete_movie(movie_id)
    return jsonify({"message": "Movie deleted successfully"})


@movie_bp.route("/<movie_id>/upload", methods=["POST"])
@auth_required()
def upload_poster(movie_id, identity):
    """Upload a poster image for a movie.
    ---
    post:
      tags: [Movies]
      security:
        - bearerAuth: []
      parameters:
        - {in: path, name: movie_id, required: true, schema: {type: string}}
      requestBody:
        required: true
        content:
          multipart/form-data:
            schema:
              type: object
              properties:
                poster: {type: string, format: binary}
      responses:
        200:
          description: Poster stored, returns its path
        400:
          description: Missing, oversized or non-image file
        404:
          description: Movie not found
    """
    to_object_id(movie_id, "movie ID")
    movies = get_services().movies
    path = store_upload("poster", lambda p: movies.attach_poster(movie_id, p))
    return jsonify({"message": "Poster uploaded successfully", "path": path})
