import click
from flask.cli import with_appcontext
from quasar_table.extensions import db
from quasar_table.models import Group, User

@click.command("seed")
@click.option("--users", "user_count", default=20, show_default=True, help="Number of demo users.")
@with_appcontext
def seed_command(user_count):
    """Seed the database with demo groups and users."""
    click.echo("Seeding database...")
    db.create_all()
    
    # 1. Groups
    groups = []
    for name in ("Admins", "Operators", "Viewers"):
        group = Group.query.filter_by(name=name).first()
        if not group:
            group = Group(name=name)
            db.session.add(group)
        groups.append(group)
    
    db.session.commit()
    click.echo("Groups seeded.")
    
    # 2. Users
    created = 0
    for i in range(1, user_count + 1):
        email = f"user{i}@example.com"
        if User.query.filter_by(email=email).first():
            continue
        db.session.add(User(name=f"User {i}", email=email, group=groups[i % len(groups)]))
        created += 1
    
    db.session.commit()
    click.echo(f"Users seeded ({created} created).")
