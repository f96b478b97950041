"""Demo of the question types, as a mock sign-up form."""

from formterm import Asker, form, markdown

STATES = {
    "CA": "California",
    "NY": "New York",
}


@form(
    id="demo",
    title="Demo",
    description=markdown("""
        Demo of various form elements using a mock sign-up form.
    """),
)
async def demo(a: Asker) -> None:
    username = await a.text("Username")
    password = await a.password("Password")
    # regular control flow works: re-ask until the passwords match
    while True:
        confirm_password = await a.password("Confirm Password")
        if password == confirm_password:
            break
        await a.info("Passwords do not match", description="Please try again.")

    address = await a.group(
        "Address",
        {
            "line1": a.text("Line 1"),
            "line2": a.text("Line 2"),
            "city": a.text("City"),
            "state": a.dropdown("State", STATES),
            "zip": a.text("ZIP Code"),
        },
    )
    colors = await a.checkboxes(
        "Favorite colors",
        {"red": "Red", "blue": "Blue", "green": "Green"},
    )
    await a.confirm(
        "Sign up?",
        description=markdown(f"""
            **Username:** {username}

            **Address:**
            - {address["line1"]}
            - {address["line2"]}
            - {address["city"]}, {address["state"]} {address["zip"]}

            **Colors:** {", ".join(colors) or "none"}
        """),
    )
