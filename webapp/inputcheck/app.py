import os
import sys
import webbrowser

from flask import Flask

from inputcheck.config.settings import Config


def create_app(test_config=None):
    """
    Build the Flask application.
    Works both from source and as a PyInstaller exe.

    ``test_config`` may be a mapping or a config class; it is applied on top
    of the default ``Config``.
    """

    # --------- templates/static location for exe and source ---------
    if getattr(sys, "frozen", False):
        # Frozen: files are extracted to the _MEIPASS temp folder
        base_dir = sys._MEIPASS
        template_folder = os.path.join(base_dir, "inputcheck", "templates")
        static_folder = os.path.join(base_dir, "inputcheck", "static")
    else:
        base_dir = os.path.abspath(os.path.dirname(__file__))
        template_folder = os.path.join(base_dir, "templates")
        static_folder = os.path.join(base_dir, "static")

    app = Flask(__name__, template_folder=template_folder, static_folder=static_folder)

    # --------- config ---------
    app.config.from_object(Config)
    if test_config is not None:
        if isinstance(test_config, dict):
            app.config.from_mapping(test_config)
        else:
            app.config.from_object(test_config)

    # Respect environment for production vs development.
    # Use FLASK_ENV or APP_ENV to choose 'production' mode; otherwise fall back to config.
    if not app.config.get('TESTING', False):
        env_name = os.environ.get('FLASK_ENV') or os.environ.get('APP_ENV') or app.config.get('ENV', 'development')
        if str(env_name).lower() == 'production':
            app.config['ENV'] = 'production'
            app.config['DEBUG'] = False
            app.jinja_env.auto_reload = False
        else:
            app.config['ENV'] = 'development'
            app.config['DEBUG'] = bool(app.config.get('DEBUG', False))
            app.jinja_env.auto_reload = bool(app.config.get('DEBUG', False))

    app.logger.info(
        "[startup] checksum=%s prefix=%s dns_lookup=%s",
        app.config.get('EID_CHECKSUM_ENABLED'),
        app.config.get('EID_REQUIRED_PREFIX') or '-',
        app.config.get('EMAIL_DNS_LOOKUP'),
    )

    # --------- CLI commands ---------
    import click
    from inputcheck.common.validators import generate_valid_eid
    from inputcheck.domain.submission import FieldKind
    from inputcheck.services.activity_logger import log_activity, ActionType, ActionCategory
    from inputcheck.services.validation_service import ValidationService

    @app.cli.command("generate-eid")
    @click.argument("year", type=int, default=2000)
    @click.argument("sequence", type=int, default=1234567)
    @click.option("--prefix", default="784", show_default=True)
    def generate_eid(year, sequence, prefix):
        """Print a valid Emirates ID for YEAR and SEQUENCE."""
        try:
            eid = generate_valid_eid(year, sequence, prefix)
        except ValueError as e:
            raise click.BadParameter(str(e))
        log_activity(
            action_type=ActionType.EID_GENERATE,
            action_category=ActionCategory.CLI,
        )
        click.echo(eid)

    @app.cli.command("validate")
    @click.argument("field", type=click.Choice([k.value for k in FieldKind] + ["national_id"]))
    @click.argument("value")
    def validate_value(field, value):
        """Validate VALUE as FIELD using the current configuration."""
        service = ValidationService.from_app_config(app.config)
        errors = service.validate_field(field, value, lookup_domain=True)
        if not errors:
            click.echo("valid")
            return
        for error in errors:
            click.echo(f"- {error}")
        sys.exit(1)

    # --------- Blueprints ---------
    from inputcheck.api.validation import bp as validation_bp
    app.register_blueprint(validation_bp)

    # --------- Emirates ID display filter ---------
    @app.template_filter("eid_format")
    def eid_format_filter(value):
        """Show an Emirates ID as XXX-YYYY-XXXXXXX-X."""
        if not value:
            return ""
        from inputcheck.common.utils import format_national_id
        return format_national_id(value)

    return app


def open_browser():
    """Open the local address in the default browser."""
    url = f"http://127.0.0.1:{os.environ.get('PORT', 8080)}/"
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        pass
