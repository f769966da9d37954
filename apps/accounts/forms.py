from django import forms
from django.utils.translation import gettext_lazy as _

from .models import User


class AccountForm(forms.ModelForm):
    """Profile form shared by registration and account pages."""

    # Set by the presenter / processor before the form is handed out
    action = ''
    submit = _('Submit')

    class Meta:
        model = User
        fields = ['email', 'fullname']
        labels = {
            'email': _('E-mail Address'),
            'fullname': _('Full Name'),
        }
        widgets = {
            'email': forms.EmailInput(),
            'fullname': forms.TextInput(),
        }

    def describe(self):
        """Return a JSON-friendly description of the form for API clients."""
        fields = []
        for bound_field in self:
            fields.append({
                'name': bound_field.name,
                'label': str(bound_field.label),
                'type': bound_field.field.widget.input_type,
                'required': bound_field.field.required,
                'value': bound_field.value() or '',
            })

        return {
            'action': self.action,
            'submit': str(self.submit),
            'fields': fields,
        }
