# backend/clinic/services/role_agent.py

from clinic.models.directory import RoleAccess, UiConfig, UserRole

ROLE_ACCESS = {
    UserRole.ADMIN: RoleAccess(
        role=UserRole.ADMIN,
        permissions=[
            "manage_users",
            "verify_doctors",
            "view_system_stats",
            "edit_settings",
            "view_audit_logs",
        ],
        ui_config=UiConfig(
            show_dashboard=True,
            show_records=True,
            show_admin_panel=True,
            can_prescribe=False,
        ),
    ),
    UserRole.DOCTOR: RoleAccess(
        role=UserRole.DOCTOR,
        permissions=[
            "view_assigned_patients",
            "write_prescription",
            "create_medical_record",
            "view_consultation_queue",
        ],
        ui_config=UiConfig(
            show_dashboard=True,
            show_records=True,
            show_admin_panel=False,
            can_prescribe=True,
        ),
    ),
    UserRole.PATIENT: RoleAccess(
        role=UserRole.PATIENT,
        permissions=[
            "run_ai_consultation",
            "view_own_history",
            "view_own_prescriptions",
            "trigger_emergency",
        ],
        ui_config=UiConfig(
            show_dashboard=True,
            # patients only ever see their own records
            show_records=True,
            show_admin_panel=False,
            can_prescribe=False,
        ),
    ),
}


class RoleDecisionAgent:
    """Maps a user role to its permission list and portal layout flags.

    Unknown roles get the patient profile, the least privileged one.
    """

    def determine_access(self, role) -> RoleAccess:
        try:
            role = UserRole(role)
        except ValueError:
            role = UserRole.PATIENT
        return ROLE_ACCESS[role].model_copy(deep=True)

    def has_permission(self, role, permission: str) -> bool:
        return permission in self.determine_access(role).permissions
