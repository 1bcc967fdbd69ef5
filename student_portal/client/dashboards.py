import logging

from student_portal.client.api_client import PortalApiClient, PortalApiError, RosterStats, Student
from student_portal.client.session_store import SessionStore

logger = logging.getLogger(__name__)


class AdminDashboard:
    """Roster management for admins; the list is reloaded after each change."""

    def __init__(self, api: PortalApiClient) -> None:
        self.api = api
        self.students: list[Student] = []
        self.loading = True

    def load(self) -> list[Student]:
        try:
            self.students = self.api.list_students()
        except PortalApiError:
            logger.exception('Failed to load students')
        finally:
            self.loading = False
        return self.students

    def filtered(self, search_term: str) -> list[Student]:
        term = search_term.strip().lower()
        if not term:
            return list(self.students)
        return [
            student
            for student in self.students
            if term in student.name.lower()
            or term in student.email.lower()
            or term in student.course.lower()
        ]

    def save(self, form: dict, editing_id: int | None = None) -> bool:
        try:
            if editing_id is None:
                self.api.create_student(form)
            else:
                self.api.update_student(editing_id, form)
        except PortalApiError:
            logger.exception('Failed to save student')
            return False
        self.load()
        return True

    def delete(self, student_id: int) -> bool:
        try:
            self.api.delete_student(student_id)
        except PortalApiError:
            logger.exception('Failed to delete student')
            return False
        self.load()
        return True

    def stats(self) -> RosterStats | None:
        try:
            return self.api.roster_stats()
        except PortalApiError:
            logger.exception('Failed to load roster stats')
            return None


class StudentProfile:
    """The signed-in student's own record."""

    def __init__(self, api: PortalApiClient, session: SessionStore) -> None:
        self.api = api
        self.session = session
        self.student: Student | None = None

    def load(self) -> Student | None:
        if self.session.user is None:
            return None
        try:
            self.student = self.api.get_student_profile(self.session.user.id)
        except PortalApiError:
            logger.exception('Failed to load student profile')
            self.student = None
        return self.student

    def save(self, form: dict) -> bool:
        if self.student is None:
            return False
        try:
            self.student = self.api.update_student(self.student.id, form)
        except PortalApiError:
            logger.exception('Failed to update profile')
            return False
        return True
