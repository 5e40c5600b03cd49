from dataclasses import dataclass

from flask import current_app

from services.application_service import ApplicationService
from services.chat_service import ChatService
from services.movie_service import MovieService
from services.user_service import UserService

EXTENSION_KEY = "movie_rental"


@dataclass
class Services:
    users: UserService
    movies: MovieService
    applications: ApplicationService
    chats: ChatService


def build_services(database, pepper=""):
    return Services(
        users=UserService(database, pepper=pepper),
        movies=MovieService(database),
        applications=ApplicationService(database),
        chats=ChatService(database),
    )


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
