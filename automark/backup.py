"""
Backup structure for automark submissions.

``define_submission_subplugin_structure`` only describes what gets exported
under a submission node. ``BackupWriter`` walks any such description against
a record store and builds the XML.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .lang import COMPONENT
from .models import TABLE_NAME

logger = logging.getLogger(__name__)

# Placeholder substituted with the enclosing element's id while walking
VAR_PARENTID = "__parentid__"

# Written in place of NULL so restore can tell it apart from ""
NULL_MARKER = "$@NULL@$"

SUBPLUGIN_NAME = "subplugin_assignsubmission_automark_submission"

# Columns exported for each automark row
AUTOMARK_FIELDS = ("value", "submission")

# File areas whose files travel with the submission. None yet.
FILE_AREAS = ()


@dataclass(frozen=True)
class SourceTable:
    table: str
    params: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class FileAnnotation:
    component: str
    filearea: str
    itemid_field: str


@dataclass(frozen=True)
class BackupElement:
    name: str
    fields: Tuple[str, ...] = ()
    source: Optional[SourceTable] = None
    children: Tuple["BackupElement", ...] = ()
    file_annotations: Tuple[FileAnnotation, ...] = ()


def define_submission_subplugin_structure():
    """Return the tree to attach below each exported submission."""
    automark = BackupElement(
        "submission_automark",
        fields=AUTOMARK_FIELDS,
        source=SourceTable(TABLE_NAME, {"submission": VAR_PARENTID}),
        file_annotations=tuple(
            FileAnnotation(COMPONENT, filearea, "submission") for filearea in FILE_AREAS
        ),
    )
    wrapper = BackupElement(SUBPLUGIN_NAME, children=(automark,))
    return BackupElement("plugin_element", children=(wrapper,))


class BackupWriter:
    def __init__(self, store):
        self.store = store
        self.annotated_files = []

    def _conditions(self, source, parent_id):
        return {
            key: parent_id if value == VAR_PARENTID else value
            for key, value in source.params.items()
        }

    def _write(self, parent, element, parent_id):
        if element.source is None:
            node = ET.SubElement(parent, element.name)
            for child in element.children:
                self._write(node, child, parent_id)
            return

        rows = self.store.get_records(element.source.table, self._conditions(element.source, parent_id))
        for row in rows:
            node = ET.SubElement(parent, element.name, id=str(row.id))
            for name in element.fields:
                value = getattr(row, name)
                ET.SubElement(node, name).text = NULL_MARKER if value is None else str(value)
            for annotation in element.file_annotations:
                self.annotated_files.append(
                    (annotation.component, annotation.filearea, getattr(row, annotation.itemid_field))
                )
            for child in element.children:
                self._write(node, child, row.id)

    def write_submission(self, submission_id, structure=None):
        """
        Build the ``<submission>`` node for one submission id.

        Returns:
            xml.etree.ElementTree.Element
        """
        structure = structure or define_submission_subplugin_structure()
        submission = ET.Element("submission", id=str(submission_id))
        for child in structure.children:
            self._write(submission, child, submission_id)
        logger.debug("Wrote backup for submission %s", submission_id)
        return submission

    def write_activity(self, assignment_id, submission_ids, structure=None):
        """Build a minimal ``<activity>`` tree holding the given submissions."""
        activity = ET.Element("activity", moduleid=str(assignment_id), modulename="assign")
        assign = ET.SubElement(activity, "assign", id=str(assignment_id))
        submissions = ET.SubElement(assign, "submissions")
        for submission_id in submission_ids:
            submissions.append(self.write_submission(submission_id, structure))
        return activity


def to_xml(element):
    return ET.tostring(element, encoding="unicode")
