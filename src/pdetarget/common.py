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
Common code for the PDE target tools

Created on Mar 14, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import logging
import logging.handlers
import sys
import os.path

class PdeTargetError(RuntimeError):
    '''Base class for all errors which should stop the build'''
    pass

class ConfigurationError(PdeTargetError):
    '''A required input is missing or invalid'''
    pass

class MalformedInputError(PdeTargetError):
    '''An input file exists but doesn't have the expected structure'''
    pass

class SerializationError(PdeTargetError):
    '''Writing an output file failed'''
    pass

def configLogger(fileName, verbose=False):
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers = []

    dir = os.path.dirname(os.path.abspath(fileName))
    if not os.path.exists(dir):
        os.makedirs(dir)

    doRollover = os.path.exists(fileName) and os.stat(fileName).st_size > 0

    handler = logging.handlers.RotatingFileHandler(fileName,
                                                   maxBytes=0, backupCount=5, encoding='UTF-8')
    handler.setFormatter(logging.Formatter(fmt='%(asctime)s %(levelname)s %(name)s %(message)s'))
    handler.setLevel(logging.DEBUG)

    # Create a new log file each time the tool is run
    if doRollover:
        handler.doRollover()

    root.addHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler.setFormatter(logging.Formatter(fmt='%(message)s'))

    root.addHandler(handler)

def mustBeFile(path, what='File'):
    '''Return the absolute path if it's an existing, regular file'''
    if not path:
        raise ConfigurationError('%s is not configured' % what)

    if not os.path.exists(path):
        raise ConfigurationError("%s %s doesn't exist" % (what, path))

    if not os.path.isfile(path):
        raise ConfigurationError('%s %s is not a file' % (what, path))

    return os.path.abspath(path)

def mustBeDirectory(path, what='Directory'):
    if not os.path.exists(path):
        raise ConfigurationError("%s %s doesn't exist" % (what, path))

    if not os.path.isdir(path):
        raise ConfigurationError('%s %s is not a directory' % (what, path))

    return os.path.abspath(path)

def canonicalPath(path):
    '''Absolute path with all symlinks resolved'''
    return os.path.realpath(os.path.abspath(path))

def stripExtension(fileName):
    '''Remove the last extension from a file name'''
    pos = fileName.rfind('.')
    if pos < 0:
        return fileName
    return fileName[:pos]

def ensureParentDirectory(fileName):
    dir = os.path.dirname(os.path.abspath(fileName))
    if os.path.exists(dir):
        return

    try:
        os.makedirs(dir)
    except OSError as e:
        raise SerializationError("Can't create directory %s: %s" % (dir, e)) from e
