import logging
from datetime import datetime, timezone

from database import to_object_id
from errors import NotFoundError
from models import Application

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(self, database):
        self.collection = database["applications"]

    def _find(self, query):
        return [Application.from_document(doc) for doc in self.collection.find(query)]

    def create_application(self, fields, user_id):
        document = dict(fields)
        document.update(
            {
                "status": "new",
                "createdAt": datetime.now(timezone.utc),
                "userId": user_id,
            }
        )
        result = self.collection.insert_one(document)
        logger.info("Created application %s for user %s", result.inserted_id, user_id)
        return str(result.inserted_id)

    def list_applications(self):
        return self._find({})

    def list_by_user(self, user_id):
        return self._find({"userId": user_id})

    def list_by_email(self, email):
        return self._find({"applicantEmail": email})

    def update_status(self, application_id, status):
        # any status may follow any other
        result = self.collection.update_one(
            {"_id": to_object_id(application_id, "application ID")}, {"$set": {"status": status}}
        )
        if result.matched_count == 0:
            raise NotFoundError("Application not found")
        logger.info("Application %s status set to %s", application_id, status)

    def attach_image(self, application_id, image_path):
        result = self.collection.update_one(
            {"_id": to_object_id(application_id, "application ID")},
            {"$set": {"imagePath": image_path}},
        )
        if result.matched_count == 0:
            raise NotFoundError("Application not found")
