from .forms import AccountForm


class AccountPresenter:
    """Builds account forms bound to a user instance."""

    form_class = AccountForm

    def profile(self, user, action: str) -> AccountForm:
        form = self.form_class(instance=user)
        form.action = action
        return form
