import pytest
from django.urls import reverse

from users.models import CustomUser

ADMIN_PAYLOAD = {
    "email": "Jefa@Example.com",
    "password": "Str0ngPass!2024",
    "name": "Jefa Inventario",
    "phone_number": "+573005556677",
}


@pytest.mark.django_db
def test_admin_creates_admin_account(admin_client):
    response = admin_client.post(reverse("admin-account-list"), ADMIN_PAYLOAD, format="json")

    assert response.status_code == 201
    created = CustomUser.objects.get(email="jefa@example.com")
    assert created.role == CustomUser.Role.ADMIN
    assert created.is_staff is True
    assert created.check_password("Str0ngPass!2024")
    assert "password" not in response.data


@pytest.mark.django_db
def test_admin_account_email_must_be_unique(admin_client, staff_user):
    payload = {**ADMIN_PAYLOAD, "email": staff_user.email.upper()}

    response = admin_client.post(reverse("admin-account-list"), payload, format="json")

    assert response.status_code == 400
    assert "email" in response.data["errors"]


@pytest.mark.django_db
def test_admin_accounts_list_only_admins(admin_client, admin_user, staff_user, customer_user):
    response = admin_client.get(reverse("admin-account-list"))

    assert response.status_code == 200
    assert [item["id"] for item in response.data["results"]] == [str(admin_user.id)]


@pytest.mark.django_db
def test_admin_updates_other_admin(admin_client, django_user_model):
    other = django_user_model.objects.create_user(
        email="otra@example.com", password="Str0ngPass!2024", name="Otra", role="ADMIN",
    )
    url = reverse("admin-account-detail", args=[other.id])

    response = admin_client.patch(url, {"name": "Otra Admin", "password": "NuevaClave!2025"}, format="json")

    assert response.status_code == 200
    other.refresh_from_db()
    assert other.name == "Otra Admin"
    assert other.check_password("NuevaClave!2025")


@pytest.mark.django_db
def test_admin_deletes_other_admin_but_not_self(admin_client, admin_user, django_user_model):
    other = django_user_model.objects.create_user(
        email="otra@example.com", password="Str0ngPass!2024", name="Otra", role="ADMIN",
    )

    own = admin_client.delete(reverse("admin-account-detail", args=[admin_user.id]))
    deleted = admin_client.delete(reverse("admin-account-detail", args=[other.id]))

    assert own.status_code == 409
    assert own.data["code"] == "USR-SELF-DELETE"
    assert deleted.status_code == 204
    assert not CustomUser.objects.filter(id=other.id).exists()


@pytest.mark.django_db
def test_admin_accounts_are_admin_only(staff_client, customer_client, api_client):
    url = reverse("admin-account-list")

    assert staff_client.get(url).status_code == 403
    assert staff_client.post(url, ADMIN_PAYLOAD, format="json").status_code == 403
    assert customer_client.get(url).status_code == 403
    assert api_client.get(url).status_code == 401


@pytest.mark.django_db
def test_user_updates_own_profile(customer_client, customer_user):
    url = reverse("user-detail", args=[customer_user.id])

    response = customer_client.patch(url, {"name": "Cliente Nuevo", "status": "INACTIVE"}, format="json")

    assert response.status_code == 200
    customer_user.refresh_from_db()
    assert customer_user.name == "Cliente Nuevo"
    # El estado solo lo cambia un ADMIN
    assert customer_user.status == CustomUser.Status.ACTIVE


@pytest.mark.django_db
def test_user_cannot_update_or_read_another_user(customer_client, django_user_model):
    other = django_user_model.objects.create_user(
        email="vecino@example.com", password="Str0ngPass!2024", name="Vecino", role="USER",
    )
    url = reverse("user-detail", args=[other.id])

    assert customer_client.get(url).status_code == 403
    assert customer_client.patch(url, {"name": "Hackeado"}, format="json").status_code == 403
    other.refresh_from_db()
    assert other.name == "Vecino"


@pytest.mark.django_db
def test_admin_updates_user_status_and_email(admin_client, customer_user):
    url = reverse("user-detail", args=[customer_user.id])

    response = admin_client.put(
        url,
        {"email": "Cliente@Example.com", "name": "Customer User", "status": "INACTIVE"},
        format="json",
    )

    assert response.status_code == 200
    customer_user.refresh_from_db()
    assert customer_user.email == "cliente@example.com"
    assert customer_user.is_active is False


@pytest.mark.django_db
def test_user_update_rejects_taken_email(admin_client, customer_user, staff_user):
    response = admin_client.patch(
        reverse("user-detail", args=[customer_user.id]), {"email": staff_user.email}, format="json",
    )

    assert response.status_code == 400
    assert "email" in response.data["errors"]


@pytest.mark.django_db
def test_staff_cannot_update_users(staff_client, customer_user):
    response = staff_client.patch(
        reverse("user-detail", args=[customer_user.id]), {"name": "Otro"}, format="json",
    )

    assert response.status_code == 403


@pytest.mark.django_db
def test_staff_reads_any_user(staff_client, customer_user):
    response = staff_client.get(reverse("user-detail", args=[customer_user.id]))

    assert response.status_code == 200
    assert response.data["email"] == customer_user.email
