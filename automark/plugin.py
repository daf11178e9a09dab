import logging

from markupsafe import escape

from .lang import get_string
from .models import TABLE_NAME
from .params import PARAM_RAW, PARAM_TEXT, ExternalValue

logger = logging.getLogger(__name__)


def _get(data, key, default=None):
    if isinstance(data, dict):
        return data.get(key, default)
    return getattr(data, key, default)


def _set(data, key, value):
    if isinstance(data, dict):
        data[key] = value
    else:
        setattr(data, key, value)


class ViewLink:
    """Mutable flag the caller passes to view_summary to learn whether to
    offer a link to the full submission."""

    def __init__(self, value=False):
        self.value = value

    def __bool__(self):
        return bool(self.value)


class SubmissionPlugin:
    """
    Base class for assignment submission plugins.

    The host calls these methods at fixed points of the grading workflow.
    Subclasses override the ones they care about; the defaults describe a
    plugin with no data.

    Args:
        assignment: the assignment instance the plugin is bound to (needs ``id``)
        store: a RecordStore used for all persistence
    """

    subtype = "assignsubmission"
    type = None

    def __init__(self, assignment, store):
        self.assignment = assignment
        self.store = store

    def get_name(self):
        raise NotImplementedError

    def get_type(self):
        return self.type

    def get_subtype(self):
        return self.subtype

    def get_component(self):
        return f"{self.subtype}_{self.type}"

    def get_form_elements(self, submission, form, data):
        return False

    def save(self, submission, data):
        return True

    def remove(self, submission):
        return True

    def is_empty(self, submission):
        return True

    def submission_is_empty(self, data):
        return True

    def view_summary(self, submission, show_view_link=None):
        return ""

    def copy_submission(self, source_submission, dest_submission):
        return True

    def format_for_log(self, submission):
        return ""

    def get_file_areas(self):
        return {}

    def get_external_parameters(self):
        return None


class AutomarkSubmissionPlugin(SubmissionPlugin):
    """Stores one free-text automark value per submission."""

    type = "automark"

    def _current(self, submission_id):
        return self.store.get_record(TABLE_NAME, {"submission": submission_id})

    def get_name(self):
        return get_string("pluginname", self.get_component())

    def get_form_elements(self, submission, form, data):
        form.add_element("text", "automark", self.get_name())
        form.set_type("automark", PARAM_TEXT)
        if submission:
            current = self._current(submission.id)
            _set(data, "automark", current.value if current else "")
        return True

    def save(self, submission, data):
        value = _get(data, "automark")
        current = self._current(submission.id)

        if current:
            current.value = value
            updated = self.store.update_record(TABLE_NAME, current)
            logger.info("Updated automark for submission %s", submission.id)
            return updated

        entry = {
            "value": value,
            "submission": submission.id,
            "assignment": self.assignment.id,
        }
        entry_id = self.store.insert_record(TABLE_NAME, entry)
        logger.info("Created automark %s for submission %s", entry_id, submission.id)
        return bool(entry_id) and entry_id > 0

    def submission_is_empty(self, data):
        return (_get(data, "automark") or "").strip() == ""

    def is_empty(self, submission):
        current = self._current(submission.id)
        return not current or (current.value or "").strip() == ""

    def remove(self, submission):
        submission_id = submission.id if submission else 0
        if submission_id:
            deleted = self.store.delete_records(TABLE_NAME, {"submission": submission_id})
            logger.info("Removed %d automark rows for submission %s", deleted, submission_id)
        return True

    def view_summary(self, submission, show_view_link=None):
        # show_view_link is left as the caller set it
        current = self._current(submission.id)
        return str(escape(current.value or "")) if current else ""

    def copy_submission(self, source_submission, dest_submission):
        current = self._current(source_submission.id)
        if current:
            self.store.insert_record(TABLE_NAME, {
                "value": current.value,
                "submission": dest_submission.id,
                "assignment": self.assignment.id,
            })
            logger.info(
                "Copied automark from submission %s to %s",
                source_submission.id,
                dest_submission.id,
            )
        return True

    def format_for_log(self, submission):
        current = self._current(submission.id)
        return get_string("numwords", self.get_component(), current.value if current else "")

    def get_external_parameters(self):
        return {"automark": ExternalValue(PARAM_RAW, "The value for this submission.")}
