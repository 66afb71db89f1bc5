# /*******************************************************************************
# * Copyright (c) 14.03.2013 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
'''
Build contexts decide whether an output must be regenerated
and hand out the streams to write it.

Created on Mar 14, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import os.path
import logging

log = logging.getLogger('pdetarget.buildcontext')

class DefaultBuildContext(object):
    '''Non-incremental context: every input counts as changed'''

    def hasDelta(self, path, output=None):
        return True

    def newFileOutputStream(self, path):
        return open(path, 'wb')

    def __repr__(self):
        return 'DefaultBuildContext()'

class IncrementalBuildContext(DefaultBuildContext):
    '''An input has changed when it is newer than the output
    which was generated from it or when the output is missing.'''

    def hasDelta(self, path, output=None):
        if output is None or not os.path.exists(output):
            return True

        if not os.path.exists(path):
            return True

        changed = os.path.getmtime(path) > os.path.getmtime(output)
        log.debug('%s %s since %s was written' % (path, 'changed' if changed else 'unchanged', output))
        return changed

    def __repr__(self):
        return 'IncrementalBuildContext()'
