from pytest_archon import archrule


def test_ports_do_not_import_adapters() -> None:
    """
    Ports describe the collaborators the mailer needs.
    They must not depend on any concrete adapter.
    """
    (
        archrule("ports_are_abstract")
        .match("commerce_mailer.ports*")
        .should_not_import("commerce_mailer.email*")
        .should_not_import("commerce_mailer.template*")
        .should_not_import("commerce_mailer.memory*")
        .should_not_import("aiosmtplib*")
        .should_not_import("jinja2*")
        .check("commerce_mailer")
    )


def test_assemblers_do_not_send() -> None:
    """
    Assemblers only read from the domain services.
    Rendering and delivery belong to the mail client.
    """
    (
        archrule("assemblers_are_read_only")
        .match("commerce_mailer.assemblers*")
        .should_not_import("commerce_mailer.mail_client")
        .should_not_import("commerce_mailer.dispatcher")
        .should_not_import("commerce_mailer.email*")
        .should_not_import("commerce_mailer.template*")
        .check("commerce_mailer")
    )


def test_money_helpers_are_standalone() -> None:
    """Pricing and presentation helpers have no knowledge of events or transports."""
    for module in ("commerce_mailer.pricing", "commerce_mailer.presentation"):
        (
            archrule(f"{module}_isolation")
            .match(module)
            .should_not_import("commerce_mailer.assemblers*")
            .should_not_import("commerce_mailer.events")
            .should_not_import("commerce_mailer.ports*")
            .check("commerce_mailer")
        )


def test_adapters_are_independent() -> None:
    """The SMTP sender and Jinja2 renderer never import each other."""
    (
        archrule("smtp_independence")
        .match("commerce_mailer.email*")
        .should_not_import("commerce_mailer.template*")
        .should_not_import("jinja2*")
        .check("commerce_mailer")
    )
    (
        archrule("jinja_independence")
        .match("commerce_mailer.template*")
        .should_not_import("commerce_mailer.email*")
        .should_not_import("aiosmtplib*")
        .check("commerce_mailer")
    )
