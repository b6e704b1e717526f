import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy import func
from pulse.extensions import db
from pulse.models.user import User
from pulse.models.creator import Creator
from pulse.services import dashboard
from pulse.services import messages as inbox
from pulse.services.creators import get_creator_by_slug, share_link
from pulse.utils.validators import is_valid_email, is_valid_slug

@click.group()
def creators():
    """Creator (inbox owner) management."""

@creators.command("create")
@click.option("--company-id", required=True)
@click.option("--slug", required=True, help="Public link slug, /p/<slug>")
@click.option("--name", "display_name", default=None)
@with_appcontext
def creators_create(company_id, slug, display_name):
    slug = slug.strip().lower()
    if not is_valid_slug(slug):
        raise click.ClickException("Slug must be lowercase letters, digits and dashes")
    if db.session.query(Creator).filter_by(company_id=company_id).count():
        raise click.ClickException("Creator already exists for company")
    if db.session.query(Creator).filter_by(slug=slug).count():
        raise click.ClickException("Slug already taken")

    creator = Creator(company_id=company_id, slug=slug, display_name=display_name)
    db.session.add(creator)
    db.session.commit()
    click.echo(f"Creator created id={creator.id} company_id={company_id} slug={slug}")

@click.group()
def users():
    """User management."""

@users.command("create")
@click.option("--email", required=True)
@click.option("--password", required=True)
@click.option("--company-id", default=None, help="Company the user acts for as a creator")
@with_appcontext
def users_create(email, password, company_id):
    email = email.strip()
    if not is_valid_email(email):
        raise click.ClickException("Invalid email")
    if db.session.query(User).filter(func.lower(User.email) == email.lower()).count():
        raise click.ClickException("User already exists")

    user = User(email=email, is_active=True, company_id=company_id)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    click.echo(f"User created id={user.id} email={user.email} company_id={company_id}")

@click.group()
def pulse():
    """Inbox reporting."""

@pulse.command("summary")
@click.option("--slug", required=True)
@with_appcontext
def pulse_summary(slug):
    """Print the dashboard headline numbers for one creator."""
    creator = get_creator_by_slug(slug)
    if creator is None:
        raise click.ClickException(f"Creator {slug!r} not found")

    items = inbox.serialize_with_reactions(inbox.list_messages(creator.id))
    cfg = current_app.config
    view = dashboard.build_overview(
        items,
        hot_threshold=cfg.get("PULSE_HOT_POST_THRESHOLD", dashboard.HOT_POST_THRESHOLD),
    )
    m = view["metrics"]
    click.echo(f"Creator: {creator.display_name or creator.slug}")
    click.echo(f"Link: {share_link(creator, cfg.get('APP_BASE_URL', ''))}")
    click.echo(f"Total: {m['total']}  This week: {m['this_week']}  Pending: {m['pending']}  Replied: {m['replied']}")
    click.echo(f"Inbox: {view['counts']['inbox']}  Reviewed: {view['counts']['reviewed']}")
    if view["needs_attention"]:
        n = view["needs_attention"]
        click.echo(f"{n} message{'s' if n != 1 else ''} need attention (older than 3 days, no reply)")
    for hot in view["hot_posts"]:
        click.echo(f"  hot [{hot['reaction_count']}] {hot['id']}")

def register_cli(app):
    app.cli.add_command(creators)
    app.cli.add_command(users)
    app.cli.add_command(pulse)
