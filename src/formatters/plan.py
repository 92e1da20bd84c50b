from algorithms.batch import plan_item_updates, StepOp
from formatters.base import BaseFormatter, FormatterFactory


class PlanFormatter(BaseFormatter):
    def _format_impl(self, result, label1, label2, old, new):
        c = self.colors
        steps = plan_item_updates(result)
        self._writeln(f"{c.bold}# {label1} -> {label2}: {len(steps)} steps{c.reset}")
        for number, step in enumerate(steps, 1):
            if step.op == StepOp.DELETE:
                index = step.source[-1]
                line = f"{c.red}{number}. delete {index}{c.reset}"
                value = self.value_of(old, index)
            elif step.op == StepOp.INSERT:
                index = step.destination[-1]
                line = f"{c.green}{number}. insert {index}{c.reset}"
                value = self.value_of(new, index)
            else:
                line = f"{c.yellow}{number}. move {step.source[-1]} -> {step.destination[-1]}{c.reset}"
                value = self.value_of(old, step.source[-1])
            self._writeln(f"{line} {value}".rstrip())


FormatterFactory.register("plan", PlanFormatter)
