import typer

app = typer.Typer()


@app.command()
def create_admin():
    from models import factory_session
    from repository.staff import create_staff
    from repository.user import create_user, get_user_by_email
    from core.security import generate_hash_password

    email = typer.prompt("email")
    password = typer.prompt("password", hide_input=True, confirmation_prompt=True)
    first_name = typer.prompt("first name", default="Admin")
    last_name = typer.prompt("last name", default="")

    with factory_session() as db:
        if get_user_by_email(db=db, email=email):
            typer.echo(f"user {email} already exists")
            raise typer.Exit(code=1)
        user = create_user(
            db=db,
            email=email,
            password=generate_hash_password(password),
            first_name=first_name,
            last_name=last_name or None,
            is_active=True,
            is_email_verified=True,
            is_commit=False,
        )
        create_staff(db=db, user=user, is_admin=True, is_commit=False)
        db.commit()
        typer.echo(f"admin {email} created")


@app.command()
def seed_catalog():
    from seeders.initial_seeders import initial_seeders

    initial_seeders()


@app.command()
def seed_demo():
    from models import factory_session
    from seeders.initial_demo_data import initial_demo_data

    with factory_session() as session:
        initial_demo_data(db=session, is_commit=True)


@app.command()
def send_test_email(email: str, name: str):
    from core.email import try_send_email
    import asyncio

    asyncio.run(try_send_email(recipient=email, name=name))


if __name__ == "__main__":
    app()
