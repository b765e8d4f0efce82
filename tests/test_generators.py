"""Tests for sample request generators."""

from regnet.auth import InvocationContext
from regnet.generators import PropertyGenerator, UserGenerator
from regnet.models.enums import PropertyStatus
from regnet.registry import Registry


class TestUserGenerator:
    """Tests for UserGenerator."""

    def test_generate(self) -> None:
        params = UserGenerator(seed=42).generate()

        assert params.name
        assert "@" in params.email
        assert len(params.national_id_number) == 12
        assert params.national_id_number.isdigit()
        assert params.national_id_number[0] not in "01"

    def test_seed_reproducibility(self) -> None:
        first = list(UserGenerator(seed=7).generate_batch(5))
        second = list(UserGenerator(seed=7).generate_batch(5))

        assert first == second

    def test_batch_identities_are_distinct(self) -> None:
        batch = list(UserGenerator(seed=1).generate_batch(25))

        assert len({(p.name, p.national_id_number) for p in batch}) == 25

    def test_as_args(self) -> None:
        params = UserGenerator(seed=3).generate()

        assert params.as_args() == (params.name, params.email, params.phone, params.national_id_number)


class TestPropertyGenerator:
    """Tests for PropertyGenerator."""

    def test_generate_for_owners(self) -> None:
        owners = list(UserGenerator(seed=42).generate_batch(3))

        props = list(PropertyGenerator(seed=42).generate_for_owners(owners, per_owner=2))

        assert len(props) == 6
        assert len({p.property_id for p in props}) == 6
        assert [p.owner_name for p in props[:2]] == [owners[0].name] * 2
        for prop in props:
            low, high = PropertyGenerator.PRICE_RANGE
            assert low <= prop.price <= high
            assert prop.price % PropertyGenerator.PRICE_STEP == 0
            assert isinstance(prop.status, PropertyStatus)

    def test_generated_requests_are_accepted(
        self, registry: Registry, user_ctx: InvocationContext, registrar_ctx: InvocationContext
    ) -> None:
        owners = list(UserGenerator(seed=11).generate_batch(4))
        for owner in owners:
            assert registry.invoke(user_ctx, "requestUser", *owner.as_args()).success
            assert registry.invoke(registrar_ctx, "approveUser", owner.name, owner.national_id_number).success

        for prop in PropertyGenerator(seed=11).generate_for_owners(owners):
            response = registry.invoke(user_ctx, "requestProperty", *prop.as_args())
            assert response.success
            assert response.payload["price"] == prop.price
