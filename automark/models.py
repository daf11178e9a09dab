from sqlalchemy import Column, Integer, Text

from .extensions import db


TABLE_NAME = "assignsubmission_automark"


class AutomarkEntry(db.Model):
    """
    The automark value an instructor attached to one assignment submission.
    Submissions and assignments are owned by the host, so the ids are plain
    integers rather than foreign keys.
    """
    __tablename__ = TABLE_NAME

    id = Column(Integer, primary_key=True)
    assignment = Column(Integer, nullable=False)  # Denormalized from the submission
    submission = Column(Integer, nullable=False, index=True)
    value = Column(Text, nullable=True)

    def __repr__(self):
        return f"<AutomarkEntry {self.id} - Submission {self.submission}>"

    def to_dict(self):
        return {
            "id": self.id,
            "assignmentId": self.assignment,
            "submissionId": self.submission,
            "value": self.value,
        }


# Tables the record store knows how to reach, keyed by table name
TABLES = {
    TABLE_NAME: AutomarkEntry,
}
