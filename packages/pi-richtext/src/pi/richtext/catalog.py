"""Default suggestion catalog: template functions and flow variables."""

from __future__ import annotations

from pi.richtext.types import SuggestionItem

TEMPLATE_FUNCTIONS_DOCS = "https://docs.yourgpt.ai/chatbot/template-functions/"


def _function(id: int, signature: str, description: str, category: str) -> SuggestionItem:
    return SuggestionItem(
        id=id,
        label=signature,
        value=signature,
        description=description,
        category=category,
        type="function",
        link=TEMPLATE_FUNCTIONS_DOCS,
    )


def _variable(id: int, name: str, description: str, category: str) -> SuggestionItem:
    return SuggestionItem(
        id=id,
        label=name,
        value=name,
        description=description,
        category=category,
        type="variable",
    )


DEFAULT_SUGGESTIONS: tuple[SuggestionItem, ...] = (
    _function(1, "eq(a, b)", "Returns true if a equals b", "Equality and Comparison"),
    _function(2, "gt(a, b)", "Returns true if a is greater than b", "Equality and Comparison"),
    _function(3, "lt(a, b)", "Returns true if a is less than b", "Equality and Comparison"),
    _function(4, "and(...args)", "Returns true if all arguments are truthy", "Logical Operations"),
    _function(5, "or(...args)", "Returns true if at least one argument is truthy", "Logical Operations"),
    _function(6, "not(value)", "Returns the negation of the provided value", "Logical Operations"),
    _function(7, "uppercase(str)", "Converts a string to uppercase", "String Manipulation"),
    _function(8, "lowercase(str)", "Converts a string to lowercase", "String Manipulation"),
    _function(9, "trim(str)", "Removes whitespace from both ends of a string", "String Manipulation"),
    _function(10, "concat(...args)", "Joins multiple strings into one", "String Manipulation"),
    _function(11, "isset(value)", "Returns true if the value is not undefined or null", "Conditional Checks"),
    _function(
        12,
        "includes(data, searchValue)",
        "Checks if data contains searchValue (works with strings, arrays, and objects)",
        "Conditional Checks",
    ),
    _function(
        13,
        "date(date, format, timezone)",
        "Formats a date according to the given format and timezone",
        "Date and Time",
    ),
    _function(14, "day(date, timezone)", "Returns the day of the week for a given date", "Date and Time"),
    _function(15, "json stringify(context)", "Converts a context object into a JSON string", "JSON Utilities"),
    _variable(16, "Flow.last_response", "Use the last response (if set from the flow)", "Flow"),
    _variable(17, "FLOW.last_utterance", "The last message from the visitor", "Flow"),
    _variable(18, "FLOW.{variable_of_your_choice}", "Use any variable from the flow by its name", "Flow"),
    _variable(19, "SESSION.status", "The status of the session", "Session"),
    _variable(20, "VISITOR.name", "The name of the visitor", "Visitor"),
    _variable(21, "VISITOR.region", "The region of the visitor", "Visitor"),
    _variable(22, "VISITOR.language", "The language of the visitor", "Visitor"),
    _variable(23, "CONTACT.name", "The name of the contact", "Contact"),
    _variable(24, "CONTACT.email", "The email of the contact", "Contact"),
    _variable(25, "CONTACT.phone", "The phone of the contact", "Contact"),
    _variable(26, "CONTACT.company", "The company of the contact", "Contact"),
    _variable(27, "CONTACT.country", "The country of the contact", "Contact"),
    _variable(28, "CONTACT.city", "The city of the contact", "Contact"),
    _variable(29, "CONTACT.region", "The region of the contact", "Contact"),
    _variable(30, "CONTACT.tags", "The tags of the contact", "Contact"),
)
