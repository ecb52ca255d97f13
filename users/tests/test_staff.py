import pytest
from django.urls import reverse

from users.models import CustomUser

STAFF_PAYLOAD = {
    "email": "bodega@example.com",
    "password": "Str0ngPass!2024",
    "name": "Ana Bodega",
    "phone_number": "+573009998877",
    "designation": "Supervisora",
    "department": "Bodega",
}


@pytest.mark.django_db
def test_admin_creates_staff(admin_client):
    response = admin_client.post(reverse("staff-list"), STAFF_PAYLOAD, format="json")

    assert response.status_code == 201
    staff = CustomUser.objects.get(email="bodega@example.com")
    assert staff.role == CustomUser.Role.STAFF
    assert staff.check_password("Str0ngPass!2024")
    assert response.data["role"] == "STAFF"


@pytest.mark.django_db
def test_staff_creation_requires_department_and_password(admin_client):
    payload = {k: v for k, v in STAFF_PAYLOAD.items() if k not in ("department", "password")}

    response = admin_client.post(reverse("staff-list"), payload, format="json")

    assert response.status_code == 400
    assert "department" in response.data["errors"]


@pytest.mark.django_db
def test_staff_cannot_list_or_create_staff(staff_client):
    assert staff_client.get(reverse("staff-list")).status_code == 403
    assert staff_client.post(reverse("staff-list"), STAFF_PAYLOAD, format="json").status_code == 403


@pytest.mark.django_db
def test_staff_reads_and_updates_own_profile(staff_client, staff_user):
    url = reverse("staff-detail", args=[staff_user.id])

    assert staff_client.get(url).status_code == 200

    response = staff_client.patch(url, {"name": "Nuevo Nombre", "department": "Ventas"}, format="json")

    assert response.status_code == 200
    staff_user.refresh_from_db()
    assert staff_user.name == "Nuevo Nombre"
    # Departamento solo lo cambia un ADMIN
    assert staff_user.department == "Logística"


@pytest.mark.django_db
def test_staff_cannot_read_other_staff(staff_client, django_user_model):
    other = django_user_model.objects.create_user(
        email="otro@example.com", password="Str0ngPass!2024", name="Otro", role="STAFF",
        designation="Auxiliar", department="Bodega",
    )

    response = staff_client.get(reverse("staff-detail", args=[other.id]))

    assert response.status_code == 403


@pytest.mark.django_db
def test_admin_deactivates_and_deletes_staff(admin_client, staff_user):
    url = reverse("staff-detail", args=[staff_user.id])

    response = admin_client.patch(url, {"status": "INACTIVE"}, format="json")
    assert response.status_code == 200
    staff_user.refresh_from_db()
    assert staff_user.is_active is False

    assert admin_client.delete(url).status_code == 204
    assert not CustomUser.objects.filter(id=staff_user.id).exists()


@pytest.mark.django_db
def test_users_listing_permissions(staff_client, customer_client, customer_user):
    assert staff_client.get(reverse("user-list")).status_code == 200
    assert customer_client.get(reverse("user-list")).status_code == 403
    assert staff_client.delete(reverse("user-detail", args=[customer_user.id])).status_code == 403


@pytest.mark.django_db
def test_admin_deletes_user(admin_client, customer_user):
    response = admin_client.delete(reverse("user-detail", args=[customer_user.id]))

    assert response.status_code == 204
    assert not CustomUser.objects.filter(id=customer_user.id).exists()
