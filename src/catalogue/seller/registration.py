"""Seller registration and store setup: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.seller.seller import Seller


@catalogue.command(part_of="Seller")
class RegisterSeller:
    email: String(required=True, max_length=254, sanitize=False)
    store_name: String(max_length=255, sanitize=False)


@catalogue.command(part_of="Seller")
class SetStoreName:
    seller_id: Identifier(required=True)
    store_name: String(required=True, max_length=255, sanitize=False)


@catalogue.command_handler(part_of=Seller)
class SellerRegistrationHandler:
    @handle(RegisterSeller)
    def register_seller(self, command):
        repo = current_domain.repository_for(Seller)

        # One seller account per email address
        existing = repo._dao.query.filter(email=command.email.strip().lower()).all().items
        if existing:
            raise ValidationError({"email": ["A seller with this email already exists"]})

        seller = Seller.register(email=command.email, store_name=command.store_name)
        repo.add(seller)
        return str(seller.id)

    @handle(SetStoreName)
    def set_store_name(self, command):
        repo = current_domain.repository_for(Seller)
        seller = repo.get(command.seller_id)
        seller.set_store_name(command.store_name)
        repo.add(seller)
