"""Unit tests for the passenger directory."""

import pytest

from airport_booking.core.exceptions import ConflictError, FailedPreconditionError, InvalidArgumentError


@pytest.mark.asyncio
async def test_find_by_email(services, sample_passenger):
    """Test finding a registered passenger by email."""
    found = await services.passengers.find_by_email("test@mail.com")

    assert found is not None
    assert found.id == sample_passenger.id
    assert found.first_name == "Mays"


@pytest.mark.asyncio
async def test_find_by_email_is_case_insensitive(services, sample_passenger):
    """Test emails are matched after trimming and lower-casing."""
    found = await services.passengers.find_by_email("  Test@Mail.COM ")

    assert found is not None
    assert found.id == sample_passenger.id


@pytest.mark.asyncio
async def test_find_by_email_not_found(services):
    """Test an unknown email returns None."""
    assert await services.passengers.find_by_email("nobody@mail.com") is None
    assert await services.passengers.find_by_email("") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["", "   ", None])
async def test_register_requires_email(services, passenger_repository, email):
    """Test registering without an email raises InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError):
        await services.passengers.register(email, "Mays")

    assert await passenger_repository.get_all() == []


@pytest.mark.asyncio
async def test_register_duplicate_email(services, sample_passenger):
    """Test registering an email twice raises ConflictError."""
    with pytest.raises(ConflictError):
        await services.passengers.register("test@mail.com", "Other")


@pytest.mark.asyncio
async def test_find_or_register_returns_existing(services, passenger_repository, sample_passenger):
    """Test an existing passenger is returned without registration details."""
    passenger = await services.passengers.find_or_register("test@mail.com")

    assert passenger.id == sample_passenger.id
    assert len(await passenger_repository.get_all()) == 1


@pytest.mark.asyncio
async def test_find_or_register_registers_new(services, passenger_repository):
    """Test an unknown email with details registers exactly one passenger."""
    passenger = await services.passengers.find_or_register("new@mail.com", "Name", "000")

    stored = await passenger_repository.get_all()
    assert passenger.email == "new@mail.com"
    assert passenger.first_name == "Name"
    assert passenger.phone == "000"
    assert [p.id for p in stored] == [passenger.id]


@pytest.mark.asyncio
async def test_find_or_register_is_idempotent(services, passenger_repository):
    """Test repeating find-or-register returns the same passenger."""
    first = await services.passengers.find_or_register("new@mail.com", "Name", "000")
    second = await services.passengers.find_or_register("new@mail.com", "Name", "000")

    assert first.id == second.id
    assert len(await passenger_repository.get_all()) == 1


@pytest.mark.asyncio
async def test_find_or_register_phone_only(services):
    """Test a phone number alone is enough to register."""
    passenger = await services.passengers.find_or_register("ola@test.com", phone="0599999999")

    assert passenger.first_name is None
    assert passenger.phone == "0599999999"


@pytest.mark.asyncio
async def test_find_or_register_without_details(services, passenger_repository):
    """Test an unknown email without details raises FailedPreconditionError."""
    with pytest.raises(FailedPreconditionError) as exc_info:
        await services.passengers.find_or_register("nodetails@mail.com")

    assert exc_info.value.detail == "cannot register: insufficient details"
    assert await passenger_repository.get_all() == []


@pytest.mark.asyncio
async def test_find_or_register_requires_email(services):
    """Test find-or-register with an empty email raises InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError):
        await services.passengers.find_or_register("", "Name", "000")


@pytest.mark.asyncio
async def test_update_passenger(services, sample_passenger):
    """Test passenger details can be edited."""
    passenger = await services.passengers.get_passenger(sample_passenger.id)
    passenger.phone = "0591111111"

    await services.passengers.update_passenger(passenger)

    assert (await services.passengers.get_passenger(sample_passenger.id)).phone == "0591111111"


@pytest.mark.asyncio
async def test_update_passenger_requires_email(services, sample_passenger):
    """Test a passenger cannot be saved without an email."""
    passenger = await services.passengers.get_passenger(sample_passenger.id)
    passenger.email = " "

    with pytest.raises(InvalidArgumentError):
        await services.passengers.update_passenger(passenger)


@pytest.mark.asyncio
async def test_delete_passenger(services, sample_passenger):
    """Test deleting a passenger."""
    assert await services.passengers.delete_passenger(sample_passenger.id) is True
    assert await services.passengers.get_passenger(sample_passenger.id) is None
    assert await services.passengers.delete_passenger(sample_passenger.id) is False
