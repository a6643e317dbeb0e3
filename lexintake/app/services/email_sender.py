from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound transactional email. Implementations never raise."""

    @abstractmethod
    async def send_welcome_email(self, email: str, firm_name: str) -> bool:
        pass


class NullEmailSender(IEmailSender):
    """Used when Mailgun is not configured."""

    async def send_welcome_email(self, email: str, firm_name: str) -> bool:
        return False
