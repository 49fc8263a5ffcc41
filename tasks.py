from invoke import task


@task
def lint(c):
    c.run("ruff check .")


@task
def format_check(c):
    c.run("ruff format --check .")


@task
def test(c):
    c.run("pytest")


@task
def simulate(c, players=5, max_players=12, rounds=5):
    """Run the strict pairing self-test over a range of field sizes."""
    c.run(
        f"swiss-pairing simulate --players {players} --max-players {max_players} "
        f"--rounds {rounds} --strict"
    )


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
