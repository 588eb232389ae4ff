class Interface:

    def __init__(self):
        self.core = None

    def onStart(self):
        pass

    def onEvent(self, event):
        """
        Invoked after a selection, a guess or a flip has been applied.
        :param event:
        :return:
        """
        self.notifyRedraw()
        pass

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass

    def onLose(self):
        pass
