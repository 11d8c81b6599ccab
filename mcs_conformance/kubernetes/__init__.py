"""Kubernetes common objects"""

from dataclasses import dataclass

from openshift_client import APIObject, timeout, OpenShiftPythonException

from mcs_conformance.lifecycle import LifecycleObject


class KubernetesObject(APIObject, LifecycleObject):
    """Custom APIObjects which tracks if the object was already committed to the server or not"""

    def __init__(self, dict_to_model=None, string_to_model=None, context=None):
        super().__init__(dict_to_model, string_to_model, context)
        self._committed = None

    @property
    def committed(self):
        """Returns True, if the objects is already committed to the server"""
        if self._committed is None:
            self._committed, _ = self.exists()
        return self._committed

    def commit(self):
        """
        Creates object on the server and returns created entity.
        It will be the same class but attributes might differ, due to server adding/rejecting some of them.
        """
        self.create(["--save-config=true"])
        self._committed = True
        return self.refresh()

    def delete(self, ignore_not_found=True, cmd_args=None):
        """Deletes the resource, by default ignored not found"""
        with timeout(30):
            deleted = super().delete(ignore_not_found, cmd_args)
            self._committed = False
            return deleted

    def wait_until(self, test_function, timelimit=60):
        """Waits until the test function succeeds for this object"""
        try:
            with timeout(timelimit):
                success, _, _ = self.self_selector().until_all(
                    success_func=lambda obj: test_function(self.__class__(obj.model))
                )
                self.refresh()
                return success
        except OpenShiftPythonException as e:
            if "Timeout" in e.msg:
                return False
            raise e


@dataclass
class Selector:
    """Dataclass for specifying label selectors"""

    # pylint: disable=invalid-name
    matchLabels: dict[str, str]

    def asdict(self):
        """Returns selector in the form expected by the API"""
        return {"matchLabels": dict(self.matchLabels)}
