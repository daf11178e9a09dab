"""
Restore of automark submissions from a course backup.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .backup import AUTOMARK_FIELDS, FILE_AREAS, NULL_MARKER, SUBPLUGIN_NAME
from .errors import MappingNotFoundError
from .lang import COMPONENT
from .models import TABLE_NAME

logger = logging.getLogger(__name__)

SUBMISSION_PATH = "/activity/assign/submissions/submission"


@dataclass(frozen=True)
class RestorePathElement:
    name: str
    path: str


class IdMapper:
    """Old id to new id lookups filled in by the host as it restores."""

    def get_mapping_id(self, item, old_id):
        raise NotImplementedError

    def get_new_parent_id(self, item):
        raise NotImplementedError


class MemoryIdMapper(IdMapper):
    def __init__(self):
        self.mappings = {}
        self.parents = {}

    def set_mapping(self, item, old_id, new_id):
        self.mappings[(item, str(old_id))] = new_id

    def set_parent(self, item, new_id):
        self.parents[item] = new_id

    def get_mapping_id(self, item, old_id):
        try:
            return self.mappings[(item, str(old_id))]
        except KeyError:
            raise MappingNotFoundError(item, old_id) from None

    def get_new_parent_id(self, item):
        try:
            return self.parents[item]
        except KeyError:
            raise MappingNotFoundError(item) from None


def _element_to_dict(element):
    data = {}
    for child in element:
        text = child.text or ""
        data[child.tag] = None if text == NULL_MARKER else text
    if "id" in element.attrib:
        data["id"] = element.attrib["id"]
    return data


class AutomarkRestoreSubplugin:
    """
    Args:
        store: RecordStore to insert restored rows into
        mapper: IdMapper resolving old submission and assignment ids
    """

    plugin_type = "assignsubmission"
    plugin_name = "automark"

    def __init__(self, store, mapper):
        self.store = store
        self.mapper = mapper
        self.related_files = []

    def get_namefor(self, name):
        return f"{self.plugin_type}_{self.plugin_name}_{name}"

    def get_pathfor(self, path):
        return f"{SUBMISSION_PATH}/{SUBPLUGIN_NAME}{path}"

    def define_submission_subplugin_structure(self):
        return [
            RestorePathElement(
                self.get_namefor("submission"),
                self.get_pathfor("/submission_automark"),
            )
        ]

    def add_related_files(self, component, filearea, mapping_item, old_itemid):
        self.related_files.append((component, filearea, mapping_item, old_itemid))

    def process_assignsubmission_automark_submission(self, data):
        # Only the exported columns; anything else in the file is ignored
        data = {key: value for key, value in dict(data).items() if key in AUTOMARK_FIELDS}
        old_submission_id = data.get("submission")
        data["assignment"] = self.mapper.get_new_parent_id("assign")
        # Set when the core assign restore processed the submission node
        data["submission"] = self.mapper.get_mapping_id("submission", old_submission_id)

        new_id = self.store.insert_record(TABLE_NAME, data)
        logger.info(
            "Restored automark %s for submission %s (was %s)",
            new_id,
            data["submission"],
            old_submission_id,
        )

        for filearea in FILE_AREAS:
            self.add_related_files(COMPONENT, filearea, "submission", old_submission_id)
        return new_id

    def restore(self, root):
        """
        Walk an XML tree and process every element matching a declared path.

        Returns:
            int: the number of elements processed
        """
        if isinstance(root, str):
            root = ET.fromstring(root)

        processed = 0
        for path_element in self.define_submission_subplugin_structure():
            handler = getattr(self, f"process_{path_element.name}")
            for element in _find_path(root, path_element.path):
                handler(_element_to_dict(element))
                processed += 1
        return processed


def _find_path(root, path):
    segments = path.strip("/").split("/")
    if root.tag != segments[0]:
        return []
    if len(segments) == 1:
        return [root]
    return root.findall("/".join(segments[1:]))
