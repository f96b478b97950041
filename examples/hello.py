"""The smallest useful form: ask a name, greet it."""

from formterm import Asker, form


@form(
    id="helloworld",
    title="Hello, world!",
    description="Asks for your name and then greets you with a personalized message.",
)
async def hello(asker: Asker) -> None:
    name = await asker.text("What's your name?")
    await asker.info(f"Hello, {name}!")
