"""Quickstart example for l10nmark.

This example demonstrates compiling a dictionary, finding templates and
rendering them as text and as HTML markup.

Note: search() returns NOT_FOUND instead of raising. Production code
should decide its own missing-text policy (fallback text, logging, ...).
"""

from l10nmark import (
    NOT_FOUND,
    CompileError,
    compile_dictionary,
    compile_markup,
    compile_text,
    expand_locales,
    render_to_html,
    search,
)

DICTIONARY = {
    "en": {
        "hello": "Hello, World!",
        "welcome": "Welcome, %1! You have %2 new messages.",
        "promo": "**%1** is *50`% off* today",
        "nav": {"home": "Home", "start": ":en.nav.home"},
        "card": [":div.card", [":h2", ":%1"], "Posted by %2"],
    },
    "en-GB": {"nav": {"home": "Home page"}},
}

table = compile_dictionary(DICTIONARY)
chains = expand_locales(["en-GB"])

# Example 1: Simple text
print("=" * 50)
print("Example 1: Simple Text")
print("=" * 50)

print(compile_text(search(table, chains, "hello"))())
# Output: Hello, World!

# Example 2: Positional arguments
print("\n" + "=" * 50)
print("Example 2: Positional Arguments")
print("=" * 50)

welcome = compile_text(search(table, chains, "welcome"))
print(welcome(["Anna", 3]))
# Output: Welcome, Anna! You have 3 new messages.
print(welcome({2: 5}))
# Output: Welcome, ! You have 5 new messages.

# Example 3: Locale fallback and pointers
print("\n" + "=" * 50)
print("Example 3: Fallback and Pointers")
print("=" * 50)

print(search(table, chains, "home", scope="nav"))
# Output: Home page
print(search(table, chains, "nav.start"))
# Output: Home
print(search(table, chains, "missing") is NOT_FOUND)
# Output: True

# Example 4: Inline markup rendered to HTML
print("\n" + "=" * 50)
print("Example 4: Inline Markup")
print("=" * 50)

promo = compile_markup(search(table, chains, "promo"), default_tag="p")
print(render_to_html(promo(["<Socks>"])))
# Output: <p><strong>&lt;Socks&gt;</strong> is <em>50% off</em> today</p>

# Example 5: Markup trees
print("\n" + "=" * 50)
print("Example 5: Markup Trees")
print("=" * 50)

card = compile_markup(search(table, chains, "card"))
print(render_to_html(card(["Release notes", "Sam"])))
# Output: <div class="card"><h2>Release notes</h2>Posted by Sam</div>

# Example 6: Compile errors
print("\n" + "=" * 50)
print("Example 6: Compile Errors")
print("=" * 50)

try:
    compile_dictionary({"en": {"a": ":en.b", "b": ":en.a"}})
except CompileError as e:
    print(e)
# Output:
# error[POINTER_CYCLE]: Cyclic pointer reference: en.a -> en.b -> en.a
#   = help: Make at least one entry in the chain a template
