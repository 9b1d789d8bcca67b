"""Plugin names shared by fixtures and tests."""

DEMO_PLUGIN = "pkg.Demo"
MAIL_PLUGIN = "iipax.service.brokerkernel.plugin.MailPushPlugin"
