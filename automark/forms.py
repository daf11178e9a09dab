from .params import PARAM_RAW, clean_param


class FormElement:
    def __init__(self, element_type, name, label):
        self.element_type = element_type
        self.name = name
        self.label = label
        self.param_type = PARAM_RAW

    def to_dict(self):
        return {
            "type": self.element_type,
            "name": self.name,
            "label": self.label,
            "paramType": self.param_type,
        }


class QuickForm:
    """
    Records the elements a plugin adds to a form.

    The host renders the elements; the plugin only declares them and their
    parameter types, which are applied when submitted data is read back.
    """

    def __init__(self):
        self.elements = {}

    def add_element(self, element_type, name, label):
        element = FormElement(element_type, name, label)
        self.elements[name] = element
        return element

    def set_type(self, name, param_type):
        self.elements[name].param_type = param_type

    def get_data(self, submitted):
        """Clean submitted values for every declared element."""
        return {
            name: clean_param(submitted.get(name), element.param_type)
            for name, element in self.elements.items()
            if name in submitted
        }

    def to_dict(self):
        return [element.to_dict() for element in self.elements.values()]
