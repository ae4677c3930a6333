"""Tests for material stock tracking."""

import pytest

from buildhub.application.services import material_service, project_service
from buildhub.domain.schemas.material import MaterialCreate, MaterialStatus, MaterialUpdate
from buildhub.domain.schemas.project import ProjectCreate


@pytest.fixture
def project(repos, owner):
    return project_service.create_project(repos.projects, ProjectCreate(name="Depot", budget=5000), owner)


def _create(repos, project, current_stock=50, total_required=100):
    return material_service.create_material(
        repos.materials, project,
        MaterialCreate(name="Cement", current_stock=current_stock, total_required=total_required,
                       cost=8.0, supplier="Acme"),
    )


class TestDeriveStatus:
    @pytest.mark.parametrize("stock, required, expected", [
        (0, 100, MaterialStatus.CRITICAL),
        (9, 100, MaterialStatus.CRITICAL),
        (10, 100, MaterialStatus.LOW),
        (29, 100, MaterialStatus.LOW),
        (30, 100, MaterialStatus.ADEQUATE),
        (150, 100, MaterialStatus.ADEQUATE),
        (5, 0, MaterialStatus.ADEQUATE),
    ])
    def test_thresholds(self, stock, required, expected):
        assert material_service.derive_status(stock, required) is expected


class TestMaterialLifecycle:
    def test_status_derived_on_create(self, repos, project):
        assert _create(repos, project, current_stock=5).status == "critical"

    def test_stock_change_rederives_status(self, repos, project):
        material = _create(repos, project)
        updated = material_service.update_material(repos.materials, material, MaterialUpdate(current_stock=20))

        assert updated.status == "low"

    def test_stock_change_overrides_explicit_status(self, repos, project):
        material = _create(repos, project)
        updated = material_service.update_material(
            repos.materials, material, MaterialUpdate(current_stock=1, status="adequate"),
        )

        assert updated.status == "critical"

    def test_explicit_status_without_stock_change(self, repos, project):
        material = _create(repos, project)
        updated = material_service.update_material(repos.materials, material, MaterialUpdate(status="low"))

        assert updated.status == "low"


class TestMaterialScoping:
    def test_find_material_hides_other_users(self, repos, project, other_user, admin):
        material = _create(repos, project)

        assert material_service.find_material(repos.projects, repos.materials, material.id, project.user_id)
        assert material_service.find_material(repos.projects, repos.materials, material.id, other_user.id) is None
        assert material_service.find_material(repos.projects, repos.materials, material.id, None)

    def test_list_user_materials(self, repos, project, owner, other_user, admin):
        _create(repos, project)

        assert len(material_service.list_user_materials(repos.materials, owner)) == 1
        assert material_service.list_user_materials(repos.materials, other_user) == []
        assert len(material_service.list_user_materials(repos.materials, admin)) == 1
