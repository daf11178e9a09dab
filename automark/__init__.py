import hmac
import os
from types import SimpleNamespace

from flask import jsonify, request

from .extensions import db
from .models import AutomarkEntry
from .plugin import AutomarkSubmissionPlugin
from .store import SQLAlchemyRecordStore
from .version import plugin as plugin_info


def get_plugin(assignment_id, store=None):
    """Build the automark plugin bound to one assignment instance."""
    store = store or SQLAlchemyRecordStore(db.session, autocommit=True)
    return AutomarkSubmissionPlugin(SimpleNamespace(id=assignment_id), store)


def load(app):
    # Load automarker secret and host version from environment
    app.config.setdefault('AUTOMARK_AUTOMARKER_SECRET', os.getenv('AUTOMARK_AUTOMARKER_SECRET'))
    app.config.setdefault(
        'AUTOMARK_HOST_VERSION',
        int(os.getenv('AUTOMARK_HOST_VERSION', plugin_info.requires)),
    )
    app.config.setdefault('AUTOMARK_HOST_BRANCH', int(os.getenv('AUTOMARK_HOST_BRANCH', plugin_info.supported[-1])))

    host_version = app.config['AUTOMARK_HOST_VERSION']
    if not plugin_info.meets_requirements(host_version):
        raise RuntimeError(
            f"{plugin_info.component} {plugin_info.release} requires host version "
            f"{plugin_info.requires}, found {host_version}"
        )
    if not plugin_info.is_supported(app.config['AUTOMARK_HOST_BRANCH']):
        app.logger.warning(
            f"{plugin_info.component} has not been tested with host branch {app.config['AUTOMARK_HOST_BRANCH']}"
        )

    # Bind the database unless the host already did
    if 'sqlalchemy' not in app.extensions:
        db.init_app(app)

    # Create tables if they don't exist
    with app.app_context():
        db.create_all()

    app.extensions['automark'] = get_plugin

    def _check_automarker_secret():
        automarker_secret = app.config.get('AUTOMARK_AUTOMARKER_SECRET')
        if not automarker_secret:
            return jsonify({"message": "Automarker secret not configured on server"}), 500

        provided_secret = request.headers.get('X-Automarker-Secret', '')
        if not hmac.compare_digest(provided_secret, automarker_secret):
            return jsonify({"message": "Invalid or missing automarker secret"}), 403
        return None

    # API: Get the automark recorded for a submission
    @app.route("/api/automark/submissions/<int:submission_id>", methods=["GET"])
    def get_automark(submission_id):
        denied = _check_automarker_secret()
        if denied:
            return denied

        entry = (
            AutomarkEntry.query
            .filter_by(submission=submission_id)
            .order_by(AutomarkEntry.id)
            .first()
        )
        if not entry:
            return jsonify({"message": "No automark for this submission"}), 404
        return jsonify(entry.to_dict())

    # API: Save an automark through the webservice parameters
    @app.route(
        "/api/automark/assignments/<int:assignment_id>/submissions/<int:submission_id>",
        methods=["PUT"],
    )
    def save_automark(assignment_id, submission_id):
        denied = _check_automarker_secret()
        if denied:
            return denied

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"message": "Request body must be a JSON object"}), 400

        plugin = get_plugin(assignment_id)
        parameters = plugin.get_external_parameters()

        unknown = sorted(set(data) - set(parameters))
        if unknown:
            return jsonify({"message": f"Unknown parameters: {', '.join(unknown)}"}), 400

        cleaned = {}
        for name, parameter in parameters.items():
            if name not in data:
                if parameter.required:
                    return jsonify({"message": f"{name} is required"}), 400
                cleaned[name] = parameter.default
                continue
            if data[name] is not None and not isinstance(data[name], str):
                return jsonify({"message": f"{name} must be a string"}), 400
            cleaned[name] = parameter.clean(data[name])

        submission = SimpleNamespace(id=submission_id)
        try:
            success = plugin.save(submission, SimpleNamespace(**cleaned))
        except Exception as e:
            db.session.rollback()
            import traceback
            app.logger.error(f"Error saving automark for submission {submission_id}: {str(e)}")
            app.logger.error(traceback.format_exc())
            return jsonify({"message": f"Failed to save: {str(e)}"}), 500

        return jsonify({
            "success": success,
            "isEmpty": plugin.is_empty(submission),
            "summary": plugin.view_summary(submission),
        })

    # API: Remove the automark for a submission
    @app.route(
        "/api/automark/assignments/<int:assignment_id>/submissions/<int:submission_id>",
        methods=["DELETE"],
    )
    def remove_automark(assignment_id, submission_id):
        denied = _check_automarker_secret()
        if denied:
            return denied

        plugin = get_plugin(assignment_id)
        return jsonify({"success": plugin.remove(SimpleNamespace(id=submission_id))})

    # API: Describe the parameters the webservice accepts
    @app.route("/api/automark/parameters", methods=["GET"])
    def get_automark_parameters():
        parameters = get_plugin(0).get_external_parameters()
        return jsonify({name: parameter.to_dict() for name, parameter in parameters.items()})
